"""Domain layer: the record shapes built with ``record_builder``.

Everything here except ``PersonB`` is immutable.
"""

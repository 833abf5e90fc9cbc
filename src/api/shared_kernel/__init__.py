"""Shared kernel: code every context may depend on.

Holds the in-process domain event dispatcher and the observation context
bound into probes. Nothing here may import a bounded context, a web
framework or the ORM.
"""

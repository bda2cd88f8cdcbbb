"""Service layer — graph operations returning ServiceResult.

Services may import from domain, core, algorithms, and infrastructure.
They never raise for graph precondition violations.
"""

"""HR data pipeline package.

Feature modules (staff, attendance, leave, imports, exports, reports, ...) with a
thin Flask controller layer on top of service/repository layers.
"""

"""College Portal package.

Organized by feature modules (attendance, students, circulars, reports, ...)
with a thin Flask controller layer on top of service/repository layers and an
injected key-value storage backend.
"""

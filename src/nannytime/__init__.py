"""NannyTime package.

Organized by feature modules (shifts, payroll, profiles, users, ...) with a
thin Flask controller layer on top of service/repository layers.
"""

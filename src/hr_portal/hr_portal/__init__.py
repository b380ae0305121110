"""HR Portal package.

This package is organized by feature modules (attendance, leaves, remote work,
approvals, ...) with a thin Flask controller layer and service/repository layers.
"""

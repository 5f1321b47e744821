"""Club Hive package.

This package is organized by feature modules (users, clubs, events,
attendance, notifications, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""

"""Sports Institute package.

Feature modules (schedules, attendance, checkins, billing, members) each keep
a domain model, a repository interface, a MySQL repository and a service.
The Flask controllers on top are a thin JSON layer for the dashboards.
"""

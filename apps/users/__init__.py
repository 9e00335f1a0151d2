"""Users app package.

This module initializes the users app: a custom user model that logs in
by email and carries a USER or ADMIN role, the JWT auth endpoints and the
admin-only user management API. Use ``apps.users.models.CustomUser`` as
the AUTH_USER_MODEL throughout the project.
"""

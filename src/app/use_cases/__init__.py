"""
Use Cases

All use cases are organized into domain folders:
- auth/: Registration, login, token rotation, logout, password change
- sessions/: Session listing, revocation and expiry maintenance
- admin/: Account administration and retention
- audit/: Activity log reads

Import from subdirectories for better organization.
"""

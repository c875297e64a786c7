"""
Use Cases

Organized into domain folders:
- auth/: Session gate, login flows and housekeeping
- users/: User session management
"""

"""
Use Cases

Organized into domain folders:
- auth/: Sign-up, login (with block re-check), logout
- gate/: Route protection
- todos/: Owner-scoped todo CRUD
- users/: Members-area context
- admin/: User roster management

Import from subdirectories.
"""

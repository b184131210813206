# Routes package init
"""
Taskie Backend - API Routes Package
=====================================

What:  HTTP route handlers. Each module owns one resource:
    - auth.py:       /api/auth/register|login|me|role|password
    - profile.py:    /api/profile, /api/profile/avatar
    - tasks.py:      /api/tasks...
    - messages.py:   /api/messages...
    - favorites.py:  /api/favorites... (tasker only)
    - reference.py:  /api/categories, /api/locations (public)
    - admin.py:      /api/admin/... (admin only)
    - files.py:      /uploads/{path}
    - health.py:     /health

Routes stay thin: pull values out of the request, call one service method,
wrap the result in an envelope. Errors are raised, never formatted here.
"""

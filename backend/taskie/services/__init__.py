"""
Taskie Backend - Services Layer
=================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton. Methods
       take the request's AsyncSession and raise TaskieError subclasses; the
       global handlers in main.py turn those into error envelopes.

Service Inventory:
    - FileService:      image validation and storage under /uploads
    - UserService:      registration, login, role switch, password, profile
    - TaskService:      task CRUD, search, status, payment proof
    - MessageService:   send, conversation list (aggregator), detail, read flag
    - FavoriteService:  tasker bookmarks
    - ReferenceService: job categories and locations
    - AdminService:     users/tasks listings, stats, reset
    - SeedService:      reference data, default admin, demo data
"""

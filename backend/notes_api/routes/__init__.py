# Routes package init
"""
Notes API - API Routes Package
===============================

Route Inventory:
    - notes.py:   GET    /api/notes          (list, newest first)
                  GET    /api/notes/{id}     (single note)
                  POST   /api/notes          (create)
                  PUT    /api/notes/{id}     (partial update)
                  DELETE /api/notes/{id}     (delete)
    - health.py:  GET    /health             (liveness + store check)

Routes are THIN: they pull values out of the request, call NoteService
and pick the status code. Errors are raised, never formatted here; the
global handlers in main.py turn them into responses.
"""

# Services package init
"""
Notes API - Services Layer
===========================

What:  Business logic sitting between routes (HTTP) and the database.

Service Inventory:
    - NoteService: validation, timestamps, ordering and the SQL for every
      note operation (see note_service.py)

Routes handle HTTP; services handle rules. Services can therefore be
unit-tested with a mocked session and no HTTP at all.
"""

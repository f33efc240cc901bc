"""
Services Layer

Roster and match business logic that:
- Accepts domain inputs (sessions, model instances, IDs)
- Returns domain outputs (models, dicts, lists)
- Does NOT depend on HTTP request/response objects
- Flushes writes but leaves commit/rollback to the caller
  (request handlers and MatchBuilder own the transaction)
"""

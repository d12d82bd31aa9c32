"""
NoteKeeper.

Notes client for a Supabase-hosted table.

- core/: Configuration, logging, exceptions, Supabase HTTP client, auth
- schemas/: Note rows and operation outcomes (pydantic)
- repositories/: PostgREST table access
- services/: Note store operations returning outcomes
- feedback/: Presenter translating outcomes into view state, alerts, haptics
"""

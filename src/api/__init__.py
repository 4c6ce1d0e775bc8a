"""
Todo List API package.

The FastAPI application lives in src.api.main (serve it with e.g.
`uvicorn src.api.main:app`). It expects the 'todos' table to already exist in
the SQLite database named by SQLITE_DB_PATH.
"""

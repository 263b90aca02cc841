"""Patient registry application for the hospital backend.

This package contains the Patient model, its migrations, the record store
and schema migrator services, and the API routes that expose them.
"""

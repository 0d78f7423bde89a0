"""
Auth package for the urlalias HTTP API.

Provides HTTP Basic Auth utilities used to gate the write routes
(create and delete). Credentials come from urlalias settings.
"""

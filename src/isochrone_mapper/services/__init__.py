"""
Shared infrastructure for outbound calls.

- http.py - ``requests`` session with retry and default timeout (geocoding)
"""

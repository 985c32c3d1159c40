"""
Shared configuration, logging and HTTP helpers.
"""

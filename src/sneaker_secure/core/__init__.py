"""
Core infrastructure for SneakerSecure: configuration, errors, logging and
key-value persistence.
"""

"""
Start order resolution for services.
"""

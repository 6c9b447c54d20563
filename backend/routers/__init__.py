"""
HTTP routers for the Desteli Studio site backend.
"""

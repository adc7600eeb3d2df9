"""Core operations shared by the API routers"""

"""Staff Records package.

Organized by feature modules (staff, photos) with a thin Flask controller layer
over service/repository layers.
"""

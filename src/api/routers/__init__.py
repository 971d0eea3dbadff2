# This file marks the routers package for API route modules.
# It groups the health and subscription endpoints registered by the app factory.

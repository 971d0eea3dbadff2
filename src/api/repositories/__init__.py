# This file marks the repositories package for subscription storage adapters.
# It exists so the service depends on one storage contract with swappable backends.

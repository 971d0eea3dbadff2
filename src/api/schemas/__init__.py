# This file marks the schemas package for API request and response models.
# Subscription and health contracts live in separate modules within it.

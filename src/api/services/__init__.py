# This file marks the services package for API business logic modules.
# Services sit between routers and repositories and never see HTTP details.

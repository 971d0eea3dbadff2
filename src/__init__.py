"""
Package marker for the subscription cost service.
The HTTP application, service layer, and storage adapters live under `src.api`; shared helpers under `src.common`.
"""

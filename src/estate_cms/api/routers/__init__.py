"""
estate_cms.api.routers

One router module per resource; `api.app` mounts them all under `/api` (probes at the root).
"""

"""HTTP routes of the play service.

`create_app` mounts the single composed `router` re-exported here; see
`playbook/routes/api_router.py` for which route modules it includes.
"""

from .api_router import router

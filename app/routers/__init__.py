"""
routers/ — FastAPI route modules.

Each file contains a thin APIRouter. Data access lives in services/.
Routers parse input, call a service, and render or redirect.
"""

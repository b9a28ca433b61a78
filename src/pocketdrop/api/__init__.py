# PocketDrop HTTP layer
# Created: 2026-10-12
#
# FastAPI routers over the core services. Routes are served at the root (what
# the bundled front-end calls) and under /api/v1/ for versioned clients.

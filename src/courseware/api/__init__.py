"""HTTP API for the Courseware backend."""

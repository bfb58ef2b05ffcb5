"""GraphQL schema for the Courseware API."""

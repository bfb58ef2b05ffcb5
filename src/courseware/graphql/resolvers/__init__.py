"""Resolver functions backing the GraphQL queries and mutations."""

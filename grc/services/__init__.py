"""Business logic. Every function takes the store and the caller explicitly."""

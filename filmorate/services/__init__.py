"""
Use cases for the Filmorate API.

Each service orchestrates a storage adapter to enforce business rules
(likes, friendships, rankings).  Routers call these services instead of
manipulating storage directly.
"""

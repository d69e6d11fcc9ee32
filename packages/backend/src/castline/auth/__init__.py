"""Authentication and authorization.

- tokens: stateless signed tokens carrying a user id
- password: bcrypt hashing
- guard: per-request identity resolution + the Forbidden gate
- access: the single authorize() decision function for roles and ownership
"""

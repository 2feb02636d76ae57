"""Authentication and authorization.

Learn: Users log in with username/password and receive a JWT that is
valid for one day. Every request passes through the identity dependency,
which turns a bearer token into a User (or nothing, when no token was
sent). Routes that need a user add the guard on top.
"""

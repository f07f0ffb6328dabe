"""
Domain services

Stateless domain logic: aggregate calculation, identity mapping, merge
policies and cart id allocation.
"""

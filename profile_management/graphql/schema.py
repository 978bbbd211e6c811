"""
GraphQL schema exports for profile management
"""
from .queries import ProfileQuery
from .mutations import ProfileMutation

# These will be merged into the main schema
__all__ = ['ProfileQuery', 'ProfileMutation']

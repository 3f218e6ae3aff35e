"""
Infrastructure layer - storage implementations behind the store interfaces.
Keeps business logic clean from implementation details.
"""

"""
Media items, local metadata providers and local image selection.
"""

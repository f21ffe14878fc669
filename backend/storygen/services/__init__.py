"""
Services: catalogs, generation clients, pipeline stages and campaigns.
"""

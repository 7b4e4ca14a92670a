"""
sitio_recommender.ingestion — Loading community profiles from survey exports.

Modules:
  profile_loader — JSON file → validated CommunityProfile(s).
"""

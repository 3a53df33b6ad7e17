"""
estate_cms.domain

Domain vocabulary and pure derivations over listing entities.
"""

# Package marker.

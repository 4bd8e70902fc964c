"""GeoView web surface."""

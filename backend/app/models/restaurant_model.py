from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

# The frontend speaks camelCase (radiusInMeters, imageUrl)
camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SearchQuery(BaseModel):
    model_config = camel_config

    latitude: float
    longitude: float
    radius_in_meters: float

class Restaurant(BaseModel):
    model_config = camel_config

    id: str
    name: str
    description: str
    latitude: float
    longitude: float
    rating: float  # Synthesized, OSM has no ratings
    address: str
    image_url: Optional[str] = None

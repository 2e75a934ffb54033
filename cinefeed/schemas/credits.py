from typing import List, Optional, Tuple

from cinefeed.core.enums import ImageSize
from cinefeed.schemas.movie import TMDBModel, image_url

class CreditBase(TMDBModel):
    """Fields common to cast and crew credits"""
    id: int
    name: str
    original_name: Optional[str] = None
    profile_path: Optional[str] = None
    popularity: Optional[float] = None
    known_for_department: Optional[str] = None
    adult: Optional[bool] = None
    gender: Optional[int] = None
    credit_id: str

    @property
    def identity(self) -> Tuple[int, str]:
        """A person can hold several credits on one title"""
        return (self.id, self.credit_id)

    @property
    def profile_url(self) -> Optional[str]:
        return image_url(self.profile_path, ImageSize.PROFILE)

class CastMember(CreditBase):
    character: Optional[str] = None
    order: int

class CrewMember(CreditBase):
    job: str
    department: str

class CreditsResponse(TMDBModel):
    """Credits aggregate for one movie"""
    id: int
    cast: List[CastMember]
    crew: List[CrewMember]

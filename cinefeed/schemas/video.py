from typing import List, Optional

from cinefeed.schemas.movie import TMDBModel

class Video(TMDBModel):
    id: str
    name: str
    key: str
    site: str
    type: str
    official: bool
    published_at: Optional[str] = None
    size: int

    @property
    def is_trailer(self) -> bool:
        return self.type.lower() == "trailer"

    @property
    def is_youtube(self) -> bool:
        return self.site.lower() == "youtube"

    @property
    def youtube_url(self) -> Optional[str]:
        if not self.is_youtube:
            return None
        return f"https://www.youtube.com/watch?v={self.key}"

    @property
    def thumbnail_url(self) -> Optional[str]:
        if not self.is_youtube:
            return None
        return f"https://img.youtube.com/vi/{self.key}/hqdefault.jpg"

class VideosResponse(TMDBModel):
    """Videos aggregate for one movie"""
    id: int
    results: List[Video]

def trailers_official_first(videos: List[Video]) -> List[Video]:
    """Keep trailers only; official ones first, source order otherwise"""
    trailers = [video for video in videos if video.is_trailer]
    return [v for v in trailers if v.official] + [v for v in trailers if not v.official]

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    file: str


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    topic_id: str
    description_html: str
    pub_date: str
    creator: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "link": self.link,
            "topicId": self.topic_id,
            "descriptionHTML": self.description_html,
            "pubDate": self.pub_date,
            "creator": self.creator,
        }


@dataclass(frozen=True)
class ExtractedDocument:
    title: str
    date: str
    url: str
    markdown: str

    def to_dict(self) -> dict:
        return asdict(self)

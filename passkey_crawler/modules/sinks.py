import logging
import requests
from datetime import datetime, timezone
from typing import Optional, List
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from passkey_crawler.modules.models import Verdict
from passkey_crawler.modules.errors import SinkError
from passkey_crawler.modules.helper.url import URLHelper
from passkey_crawler.modules.helper.candidates import CandidateResolver


logger = logging.getLogger(__name__)


LINK_CATEGORY = "Passkey Authentication"
LINK_TAGS = ["passkey", "webauthn", "fido2", "passwordless"]


def build_link_record(verdict: Verdict, query: str) -> dict:
    """ Maps a positive verdict onto the fields of a link record """
    token = CandidateResolver.domain_token(query) or query.strip().lower()
    tags = list(LINK_TAGS)
    if token and token not in tags:
        tags.append(token)
    return {
        "title": verdict.title or verdict.url,
        "url": URLHelper.normalize(verdict.url),
        "description": verdict.description,
        "category": LINK_CATEGORY,
        "tags": tags
    }


class LinkSink:
    """ Persists positive verdicts as link records. Upserts are keyed by url and idempotent. """


    def upsert(self, verdict: Verdict, query: str) -> Optional[dict]:
        if not verdict.has_passkey:
            logger.info(f"Skipping link record for site without passkey: {verdict.url}")
            return None
        record = build_link_record(verdict, query)
        logger.info(f"Upserting link record: {record['url']}")
        return self.store(record)


    def store(self, record: dict) -> dict:
        raise NotImplementedError


class MongoLinkSink(LinkSink):


    def __init__(self, collection: Collection):
        self.collection = collection


    def store(self, record: dict) -> dict:
        now = datetime.now(timezone.utc)
        try:
            self.collection.update_one(
                {"url": record["url"]},
                {
                    "$set": {
                        "title": record["title"],
                        "description": record["description"],
                        "category": record["category"],
                        "updatedAt": now
                    },
                    "$addToSet": {"tags": {"$each": record["tags"]}},
                    "$setOnInsert": {"createdAt": now}
                },
                upsert=True
            )
        except PyMongoError as e:
            raise SinkError(f"Could not store link record {record['url']}: {e}") from e
        return record


class ApiLinkSink(LinkSink):
    """ Upserts link records through the links REST api (search by url, then update or create) """


    def __init__(self, base_url: str, token: str = "", session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})


    def find(self, url: str) -> Optional[dict]:
        r = self.session.get(f"{self.base_url}/api/links/search", params={"query": url}, timeout=self.timeout)
        r.raise_for_status()
        links = r.json()
        if type(links) != list:
            return None
        for link in links:
            if type(link) == dict and link.get("url") and URLHelper.normalize(link["url"]) == url:
                return link
        return None


    def store(self, record: dict) -> dict:
        try:
            existing = self.find(record["url"])
            if existing:
                tags: List[str] = list(existing.get("tags") or [])
                tags.extend([t for t in record["tags"] if t not in tags])
                logger.info(f"Updating link {existing.get('_id')}: {record['url']}")
                r = self.session.put(
                    f"{self.base_url}/api/links/{existing['_id']}",
                    json={**record, "tags": tags}, timeout=self.timeout
                )
            else:
                logger.info(f"Creating link: {record['url']}")
                r = self.session.post(f"{self.base_url}/api/links", json=record, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise SinkError(f"Could not store link record {record['url']}: {e}") from e

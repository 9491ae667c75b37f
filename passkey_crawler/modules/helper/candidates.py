import re
import logging
from typing import List
from passkey_crawler.modules.models import Candidate
from passkey_crawler.modules.helper.url import URLHelper


logger = logging.getLogger(__name__)


class CandidateResolver:
    """ Turns a free-text query or domain into candidate site urls.
        Pure string transformation: no network access, deterministic, no side effects.
    """


    DEFAULT_TLD = "com"
    TLD_REGEX = re.compile(r"\.[a-z]{2,}$")
    PREFIX_REGEX = re.compile(r"^([a-z][a-z0-9+.-]*://)?(www\.)?")


    def __init__(self, multiple_variants: bool = False, max_url_variants: int = 0):
        self.multiple_variants = multiple_variants
        self.max_url_variants = max_url_variants


    @staticmethod
    def from_config(config: dict) -> "CandidateResolver":
        resolver_config = config.get("resolver_config", {})
        return CandidateResolver(
            multiple_variants=resolver_config.get("multiple_variants", False),
            max_url_variants=resolver_config.get("max_url_variants", 0)
        )


    @staticmethod
    def domain_token(query: str) -> str:
        """ "  WWW.Example Corp " -> "examplecorp" """
        token = query.strip().lower()
        token = CandidateResolver.PREFIX_REGEX.sub("", token)
        token = re.sub(r"[^a-z0-9.-]", "", token)
        token = CandidateResolver.PREFIX_REGEX.sub("", token)
        return token.strip(".-")


    @staticmethod
    def has_tld(domain: str) -> bool:
        return bool(CandidateResolver.TLD_REGEX.search(domain))


    def resolve(self, query: str) -> Candidate:
        q = query.strip()
        if URLHelper.is_absolute(q):
            logger.info(f"Query is an absolute url: {q}")
            return Candidate(query=query, urls=(q,))

        token = self.domain_token(q)
        if not token:
            logger.info(f"Query does not contain a domain: {query}")
            return Candidate(query=query, urls=())

        if self.has_tld(token):
            domains = [token]
        elif self.multiple_variants:
            domains = [token, f"{token}.{self.DEFAULT_TLD}"]
        else:
            domains = [f"{token}.{self.DEFAULT_TLD}"]

        # max_url_variants caps the urls per domain, not per candidate
        urls: List[str] = []
        for d in domains:
            variants = [f"https://www.{d}", f"https://{d}"]
            if self.max_url_variants > 0:
                variants = variants[:self.max_url_variants]
            for u in variants:
                if u not in urls:
                    urls.append(u)

        logger.info(f"Resolved query '{query}' to {len(urls)} candidate urls: {urls}")
        return Candidate(query=query, urls=tuple(urls))

import tldextract
from urllib import parse
from url_normalize import url_normalize


# offline extractor, uses the public suffix snapshot bundled with tldextract
_extract = tldextract.TLDExtract(suffix_list_urls=())


class URLHelper:


    @staticmethod
    def get_tld(url: str) -> str:
        """ Returns the registered domain of url (e.g. "github.com" for "https://gist.github.com/x") """
        ext = _extract(url)
        if not ext.domain or not ext.suffix:
            return ""
        return f"{ext.domain}.{ext.suffix}"


    @staticmethod
    def is_same_tld(url1: str, url2: str) -> bool:
        tld1 = URLHelper.get_tld(url1)
        return bool(tld1) and tld1 == URLHelper.get_tld(url2)


    @staticmethod
    def normalize(url: str) -> str:
        return url_normalize(url)


    @staticmethod
    def is_absolute(url: str) -> bool:
        try:
            parsed = parse.urlsplit(url)
        except ValueError:
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

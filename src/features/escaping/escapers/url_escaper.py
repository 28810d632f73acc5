import ipaddress
import re
import string
from urllib.parse import SplitResult, parse_qsl, quote, urlencode, urlsplit

from features.escaping.escape_options import UrlOptions, parse_options
from features.escaping.escapers.base_escaper import BaseEscaper
from features.escaping.escaping_context import EscapingContext
from util import log
from util.error_codes import MALFORMED_INPUT
from util.errors import InternalError

# what a well-formed absolute URL may contain, anything else (whitespace, non-ASCII) disqualifies it
URL_CHARACTERS = frozenset(string.ascii_letters + string.digits + "$-_.+!*'(),{}|\\^~[]`<>#%\";/?:@&=")
UNICODE_THRESHOLD = 0x80

# web URLs need a real host name (or a bracketed IPv6 address), other schemes take any host
WEB_SCHEMES = frozenset({"http", "https"})
HOSTNAME_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
HOSTNAME_PATTERN = re.compile(rf"{HOSTNAME_LABEL}(?:\.{HOSTNAME_LABEL})*\.?", re.ASCII)


class UrlEscaper(BaseEscaper):
    """
    Escapes link destinations.

    Well-formed absolute URLs are taken apart and put back together with each path segment,
    the query and the fragment percent-encoded; scheme, credentials, host and port are kept as
    they are. Anything else goes through the dialect's URL token table.
    """

    __options: UrlOptions

    def escape(self, text: str) -> str:
        if not self.__is_valid_url(text):
            return super().escape(text)
        try:
            escaped = self.__escape_url(text)
        except InternalError as e:
            log.w(f"Keeping the URL as-is: '{text}'", e)
            return text
        return self.post_process(escaped)

    def post_process(self, text: str) -> str:
        if not self.__options.encode_unicode:
            return text
        return "".join(quote(char, safe = "") if ord(char) >= UNICODE_THRESHOLD else char for char in text)

    def _bind_context(self, context: EscapingContext):
        super()._bind_context(context)
        self.__options = parse_options(UrlOptions, context)

    @staticmethod
    def __is_valid_url(text: str) -> bool:
        if not text or not set(text) <= URL_CHARACTERS:
            return False
        try:
            parts = urlsplit(text)
        except ValueError:
            return False
        if not parts.scheme or not parts.hostname:
            return False
        if parts.scheme in WEB_SCHEMES:
            return UrlEscaper.__is_valid_host(UrlEscaper.__authority_of(parts)[1])
        return True

    @staticmethod
    def __is_valid_host(host_port: str) -> bool:
        if host_port.startswith("["):
            address, closed, _ = host_port[1:].partition("]")
            if not closed:
                return False
            try:
                ipaddress.IPv6Address(address)
            except ValueError:
                return False
            return True
        host = host_port.partition(":")[0]
        return HOSTNAME_PATTERN.fullmatch(host) is not None

    def __escape_url(self, url: str) -> str:
        try:
            parts = urlsplit(url)
            parts.port  # noqa: B018 - validates the port
        except ValueError as e:
            raise InternalError(f"Unable to decompose URL '{url}'", MALFORMED_INPUT) from e

        userinfo, host_port = self.__authority_of(parts)
        result = f"{parts.scheme}://{userinfo}{host_port}"
        if parts.path:
            result += self.__escape_path(parts.path)
        # a bare "?" or "#" still counts as present
        if "?" in url.partition("#")[0]:
            result += f"?{self.__escape_query(parts.query)}"
        if "#" in url:
            result += f"#{quote(parts.fragment, safe = '')}"
        return result

    @staticmethod
    def __authority_of(parts: SplitResult) -> tuple[str, str]:
        # host and port are copied verbatim (no lower-casing, no port normalization)
        userinfo, has_userinfo, host_port = parts.netloc.rpartition("@")
        return (f"{userinfo}@" if has_userinfo else ""), host_port

    @staticmethod
    def __escape_path(path: str) -> str:
        return "/".join(quote(segment, safe = "") for segment in path.split("/"))

    @staticmethod
    def __escape_query(query: str) -> str:
        params: dict[str, str] = {}
        next_list_index: dict[str, int] = {}
        for key, value in parse_qsl(query, keep_blank_values = True):
            if key.endswith("[]"):
                # "tags[]=a&tags[]=b" comes back as "tags[0]=a&tags[1]=b"
                list_name = key[:-2]
                list_index = next_list_index.get(list_name, 0)
                next_list_index[list_name] = list_index + 1
                key = f"{list_name}[{list_index}]"
            params[key] = value
        return urlencode(params, safe = "", quote_via = quote)

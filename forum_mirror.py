#!/usr/bin/env python3
import argparse
import logging
import os
import posixpath
import re
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union
from urllib.parse import SplitResult, unquote, urldefrag, urljoin, urlsplit

import requests
from bs4 import BeautifulSoup, FeatureNotFound
from bs4.builder import ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.element import Tag
from bs4.formatter import HTMLFormatter
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# -------------------- Config --------------------

FAILURE_LEDGER_NAME = "failures.lst"
DEFAULT_POST_STEP = 15
FIRST_PAGE = 1
DEFAULT_PORTS = {"http": 80, "https": 443}
CHUNK_SIZE = 64 * 1024

# Attributes that may carry a link; at most one is read per element.
LINK_ATTRIBUTES = frozenset(
    {
        "action",
        "code",
        "cite",
        "data",
        "formaction",
        "href",
        "icon",
        "manifest",
        "poster",
        "src",
        "srcset",
        "usemap",
        "archive",
        "background",
        "codebase",
        "classid",
        "lowsrc",
        "longdesc",
        "profile",
    }
)
NAVIGATIONAL_ATTRIBUTES = frozenset({"action", "formaction"})
NAVIGATIONAL_HREF_TAGS = frozenset({"a", "area", "embed"})
INLINE_REL_KEYWORDS = ("stylesheet", "icon", "shortcut")

# (content-type prefixes, accepted suffixes, suffix to append)
EXTENSIONS_BY_TYPE = (
    (("text/html", "application/xhtml+xml"), (".html", ".htm"), ".html"),
    (("text/css",), (".css",), ".css"),
    (("application/atom+xml",), (".atom",), ".atom"),
    (("application/rss+xml",), (".rss",), ".rss"),
)

CSS_LINK_RE = re.compile(
    r"url\s*\(\s*(?P<q>[\"']?)(?P<url>.*?)(?P=q)\s*\)"
    r"|@import\s+(?P<iq>[\"'])(?P<import>.*?)(?P=iq)",
    re.IGNORECASE | re.DOTALL,
)
SRCSET_SPLIT_RE = re.compile(r"\s*,\s*")
WS_RE = re.compile(r"\s+")
PAGE_RANGE_RE = re.compile(r"^(?:(\d+)\.\.)?(\d+)$")

# -------------------- Settings --------------------


@dataclass(frozen=True)
class Settings:
    url_template: str
    target_dir: Path
    step: int = DEFAULT_POST_STEP
    force: bool = False
    verbose: bool = False
    workers: Optional[int] = None  # None: one worker per selected page
    timeout: Optional[float] = None  # None: wait indefinitely


@dataclass(frozen=True)
class PageTarget:
    number: int
    url: str
    directory: Path

    @classmethod
    def for_page(cls, settings: Settings, number: int) -> "PageTarget":
        offset = settings.step * (number - FIRST_PAGE)
        return cls(
            number=number,
            url=f"{settings.url_template}{offset}",
            directory=settings.target_dir / str(number),
        )


# -------------------- Utils --------------------


def ensure_parent_dir(p: Path) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)


def is_css(content_type: Optional[str]) -> bool:
    return (content_type or "").strip().lower().startswith("text/css")


def build_session() -> requests.Session:
    s = requests.Session()
    # failed pages are retried on the next run through the ledger, never in-run
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s


def http_get(
    session: requests.Session,
    url: str,
    description: str,
    *,
    timeout: Optional[float],
    stream: bool = False,
) -> Optional[requests.Response]:
    try:
        r = session.get(url, timeout=timeout, stream=stream)
    except requests.RequestException as e:
        logging.warning(
            "could not fetch %s: HTTP GET request failed: %s", description, e
        )
        return None
    if r.status_code != 200:
        logging.warning("could not fetch %s: HTTP %s", description, r.status_code)
        r.close()
        return None
    return r


def declared_encoding(resp: requests.Response) -> Optional[str]:
    if "charset" in (resp.headers.get("Content-Type") or "").lower():
        return resp.encoding
    return None


# -------------------- Paths and extensions --------------------


def normalize_extension(filename: str, content_type: Optional[str]) -> str:
    """Append the suffix a local file needs to be served as ``content_type``.

    Only HTML/XHTML, CSS, Atom and RSS are handled; any other type leaves the
    name untouched. Applying it twice gives the same result as applying it once.
    """
    ct = (content_type or "").strip().lower()
    for prefixes, accepted, suffix in EXTENSIONS_BY_TYPE:
        if ct.startswith(prefixes):
            if not filename.lower().endswith(accepted):
                filename += suffix
            break
    return filename


def is_opaque(parts: SplitResult) -> bool:
    return bool(parts.scheme) and not parts.netloc and not parts.path.startswith("/")


def host_key(parts: SplitResult) -> Optional[str]:
    """Host name plus the port when it is not the scheme's default one."""
    host = parts.hostname
    port = parts.port
    if host is None or port is None or port == DEFAULT_PORTS.get(parts.scheme):
        return host
    return f"{host}:{port}"


def _clean_path(path: str) -> str:
    path = path or "/"
    if path.endswith("/"):
        path += "index"
    # normpath on an absolute path clamps ".." at the root
    return posixpath.normpath("/" + path.lstrip("/"))


def local_path_for_url(parts: SplitResult) -> str:
    """Absolute URL-style path (still percent-encoded) a URL is mirrored at."""
    return _clean_path(parts.path)


def local_file_for_url(
    host_dir: Path,
    parts: SplitResult,
    content_type: Optional[str],
    *,
    keep_query: bool = True,
) -> Path:
    name = _clean_path(unquote(parts.path)).lstrip("/")
    if keep_query and parts.query:
        name += "?" + parts.query
    return host_dir / normalize_extension(name, content_type)


def relative_reference(
    parts: SplitResult, base_dir: str, content_type: Optional[str]
) -> str:
    ref = posixpath.relpath(local_path_for_url(parts), base_dir)
    if parts.query:
        ref += "%3F" + parts.query
    return normalize_extension(ref, content_type)


# -------------------- Resource cache --------------------


@dataclass(frozen=True)
class RewriteContext:
    base_url: str
    base_dir: str
    host: str
    cache: "ResourceCache"


class ResourceCache:
    """Per-page map of absolute resource URL to its content-type.

    A URL is downloaded at most once per page; failed downloads are not
    remembered so a later reference retries them.
    """

    def __init__(
        self,
        session: requests.Session,
        host_dir: Path,
        host: str,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.host_dir = host_dir
        self.host = host
        self.timeout = timeout
        self._types: Dict[str, str] = {}
        self._in_flight: Set[str] = set()

    def __contains__(self, url: str) -> bool:
        return url in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get_or_fetch(self, url: str) -> Optional[str]:
        if url in self._types:
            return self._types[url]
        if url in self._in_flight:
            # stylesheet importing itself, directly or through others; its file
            # may still fail to be written, so the reference is left as is
            logging.debug("not localizing stylesheet still being fetched: %s", url)
            return None
        resp = http_get(
            self.session, url, f"resource {url}", timeout=self.timeout, stream=True
        )
        if resp is None:
            return None
        content_type = resp.headers.get("Content-Type") or ""
        self._in_flight.add(url)
        try:
            stored = self._store(url, resp, content_type)
        finally:
            self._in_flight.discard(url)
            resp.close()
        if not stored:
            return None
        self._types[url] = content_type
        return content_type

    def _store(self, url: str, resp: requests.Response, content_type: str) -> bool:
        parts = urlsplit(url)
        local_path = local_file_for_url(self.host_dir, parts, content_type)
        try:
            ensure_parent_dir(local_path)
            if is_css(content_type):
                encoding = resp.encoding or "latin-1"
                text = resp.content.decode(encoding, errors="replace")
                context = RewriteContext(
                    base_url=url,
                    base_dir=posixpath.dirname(local_path_for_url(parts)),
                    host=self.host,
                    cache=self,
                )
                text = rewrite_css_text(text, context)
                local_path.write_bytes(text.encode(encoding, errors="replace"))
            else:
                with open(local_path, "wb") as f:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except (OSError, ValueError, LookupError) as e:
            logging.warning("could not write %s to %s: %s", url, local_path, e)
            return False
        except requests.RequestException as e:
            logging.warning("could not read %s: %s", url, e)
            return False
        logging.debug("downloaded resource: %s -> %s", url, local_path)
        return True


# -------------------- Link resolution --------------------


def absolutize_link(raw: str, base_url: str) -> Optional[str]:
    try:
        return urljoin(base_url, raw.strip())
    except ValueError as e:
        logging.warning("could not parse URL %r: %s", raw, e)
        return None


def localize_link(raw: str, context: RewriteContext) -> Optional[str]:
    """Fetch a same-host requisite link and return its local relative reference.

    Returns None when the link must be left as written: opaque, empty path,
    malformed, on another host, or not downloadable.
    """
    link = raw.strip()
    try:
        parts = urlsplit(link)
        if is_opaque(parts) or not parts.path:
            return None
        absolute, _ = urldefrag(urljoin(context.base_url, link))
        target = urlsplit(absolute)
        host = host_key(target)
    except ValueError as e:
        logging.warning("could not parse URL of resource %r: %s", raw, e)
        return None
    if host != context.host:
        logging.debug("not fetching resource on another host: %s", absolute)
        return None
    content_type = context.cache.get_or_fetch(absolute)
    if content_type is None:
        return None
    return relative_reference(target, context.base_dir, content_type)


def localize_srcset(value: str, context: RewriteContext) -> Optional[str]:
    candidates: List[str] = []
    changed = False
    for candidate in SRCSET_SPLIT_RE.split(value.strip()):
        if not candidate:
            continue
        comp = WS_RE.split(candidate.strip(), maxsplit=1)
        local = localize_link(comp[0], context)
        if local is not None:
            comp[0] = local
            changed = True
        candidates.append(" ".join(comp))
    if not changed:
        return None
    return ", ".join(candidates)


# -------------------- CSS rewriter --------------------


def rewrite_css_text(css_text: str, context: RewriteContext) -> str:
    out: List[str] = []
    pos = 0
    for m in CSS_LINK_RE.finditer(css_text):
        group = "url" if m.group("url") is not None else "import"
        start, end = m.span(group)
        local = localize_link(m.group(group), context)
        out.append(css_text[pos:start])
        out.append(m.group(group) if local is None else local)
        pos = end
    out.append(css_text[pos:])
    return "".join(out)


# -------------------- Markup rewriter --------------------


def bs4_parse(
    markup: Union[str, bytes], from_encoding: Optional[str] = None
) -> BeautifulSoup:
    # rel and class stay plain strings so they serialize exactly as read
    try:
        return BeautifulSoup(
            markup, "lxml", from_encoding=from_encoding, multi_valued_attributes=None
        )
    except FeatureNotFound:
        return BeautifulSoup(
            markup,
            "html.parser",
            from_encoding=from_encoding,
            multi_valued_attributes=None,
        )


def classify_link_attribute(tag: Tag) -> Tuple[Optional[str], Optional[str]]:
    """Return the element's candidate link attribute name and its rel value."""
    link_attr: Optional[str] = None
    rel: Optional[str] = None
    for name, value in tag.attrs.items():
        if link_attr is not None and rel is not None:
            break
        key = name.lower()
        if link_attr is None and key in LINK_ATTRIBUTES:
            link_attr = name
        elif rel is None and key == "rel":
            rel = " ".join(value) if isinstance(value, list) else value
    return link_attr, rel


def is_navigational(tag_name: str, attr: str, rel: Optional[str]) -> bool:
    attr = attr.lower()
    if attr in NAVIGATIONAL_ATTRIBUTES:
        return True
    if attr != "href":
        return False
    if tag_name in NAVIGATIONAL_HREF_TAGS:
        return True
    if tag_name == "link":
        rel = (rel or "").lower()
        return not any(k in rel for k in INLINE_REL_KEYWORDS)
    return False


def rewrite_markup(soup: BeautifulSoup, context: RewriteContext) -> None:
    for tag in soup.find_all(True):
        style = tag.get("style")
        if style:
            tag["style"] = rewrite_css_text(style, context)
        if tag.name == "style" and tag.string:
            new_text = rewrite_css_text(tag.string, context)
            if new_text != tag.string:
                tag.string.replace_with(new_text)

        attr, rel = classify_link_attribute(tag)
        if attr is None:
            continue
        value = tag.get(attr) or ""
        if is_navigational(tag.name, attr, rel):
            new_value = absolutize_link(value, context.base_url)
        elif attr.lower() == "srcset":
            new_value = localize_srcset(value, context)
        else:
            new_value = localize_link(value, context)
        if new_value is not None:
            tag[attr] = new_value


class RawAttributeValue(str):
    pass


def is_raw_attribute(name: str) -> bool:
    name = name.lower()
    return name == "style" or name.startswith("on")


class RawAttributeFormatter(HTMLFormatter):
    """Minimal entity substitution, document attribute order, and no escaping
    of ``style`` or event-handler attribute values."""

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        for key, value in (tag.attrs or {}).items():
            if isinstance(value, str) and is_raw_attribute(key):
                value = RawAttributeValue(value)
            yield key, value

    def attribute_value(self, value):
        if isinstance(value, RawAttributeValue):
            return value
        return super().attribute_value(value)


def serialize_html(soup: BeautifulSoup) -> bytes:
    return soup.encode("utf-8", formatter=RawAttributeFormatter())


# -------------------- Page task --------------------


def mirror_page(target: PageTarget, settings: Settings) -> bool:
    logging.debug("starting page %d into %s", target.number, target.directory)
    logging.debug("URL: %s", target.url)
    try:
        page = urlsplit(target.url)
        host = page.hostname
        origin = host_key(page)
    except ValueError as e:
        logging.error("could not parse URL of page %d: %s", target.number, e)
        return False
    if not host:
        logging.error("URL of page %d has no host: %s", target.number, target.url)
        return False

    session = build_session()
    try:
        resp = http_get(
            session, target.url, f"page {target.number}", timeout=settings.timeout
        )
        if resp is None:
            return False
        content_type = resp.headers.get("Content-Type") or ""
        try:
            soup = bs4_parse(resp.content, declared_encoding(resp))
        except ParserRejectedMarkup as e:
            logging.error("could not parse page %d: %s", target.number, e)
            return False

        host_dir = target.directory / host
        cache = ResourceCache(session, host_dir, origin, settings.timeout)
        context = RewriteContext(
            base_url=target.url,
            base_dir=posixpath.dirname(local_path_for_url(page)),
            host=origin,
            cache=cache,
        )
        rewrite_markup(soup, context)

        html_path = local_file_for_url(host_dir, page, content_type, keep_query=False)
        try:
            ensure_parent_dir(html_path)
            html_path.write_bytes(serialize_html(soup))
        except OSError as e:
            logging.error(
                "could not write page %d to %s: %s", target.number, html_path, e
            )
            return False
    finally:
        session.close()

    logging.debug(
        "finished page %d (%d resource(s)) -> %s", target.number, len(cache), html_path
    )
    return True


def fetch_topic_page(
    target: PageTarget, settings: Settings, ledger: "FailureLedger"
) -> bool:
    ok = False
    try:
        ok = mirror_page(target, settings)
    finally:
        if not ok:
            ledger.record(target.number)
    return ok


# -------------------- Failure ledger --------------------


class FailureLedger:
    """Line-delimited list of page numbers that failed during the current run.

    The previous run's list is read back and archived as ``<name>.<N>`` by
    :meth:`recover` before :meth:`open` starts an empty one.
    """

    def __init__(self, path: Path):
        self.path = path
        self.lock = Lock()
        self._fh = None

    def recover(self) -> List[int]:
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return []
        except OSError as e:
            logging.error(
                "could not open list of failed downloads (%s) for reading: %s",
                self.path,
                e,
            )
            return []

        numbers: Dict[int, None] = {}
        for line in text.splitlines():
            try:
                n = int(line.strip())
            except ValueError:
                continue
            if n >= FIRST_PAGE:
                numbers[n] = None
        recovered = list(numbers)
        if recovered:
            logging.info(
                "found a list of failed downloads (%s); will reattempt them", self.path
            )
            logging.info(
                "pages for which download will be reattempted: %s",
                ", ".join(str(n) for n in recovered),
            )
        self.archive()
        return recovered

    def archive_path(self) -> Path:
        i = 0
        while True:
            candidate = self.path.with_name(f"{self.path.name}.{i}")
            if not candidate.exists():
                return candidate
            i += 1

    def archive(self) -> Optional[Path]:
        archived = self.archive_path()
        try:
            self.path.rename(archived)
        except OSError as e:
            logging.error(
                "could not rename list of failed downloads to %s: %s", archived, e
            )
            return None
        logging.debug("archived %s as %s", self.path, archived)
        return archived

    def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = open(self.path, "w", encoding="utf-8")
        except OSError as e:
            logging.error(
                "could not create file %s in which to log failed downloads: %s",
                self.path,
                e,
            )
            raise

    def record(self, number: int) -> None:
        with self.lock:
            if self._fh is None:
                raise RuntimeError(f"failure ledger {self.path} is not open")
            self._fh.write(f"{number}\n")
            self._fh.flush()

    def close(self) -> None:
        with self.lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None


# -------------------- Orchestrator --------------------


def select_pages(
    pages: Iterable[int], recovered: Iterable[int], settings: Settings
) -> List[PageTarget]:
    recovered_set = set(recovered)
    targets: List[PageTarget] = []
    for number in sorted(set(pages)):
        target = PageTarget.for_page(settings, number)
        if (
            not settings.force
            and number not in recovered_set
            and target.directory.is_dir()
        ):
            logging.info(
                "skipping page %d: %s already exists", number, target.directory
            )
            continue
        targets.append(target)
    return targets


def mirror_topic(settings: Settings, requested: Iterable[int]) -> List[int]:
    """Fetch the requested pages plus last run's failures; return failed pages.

    Raises ValueError when there is nothing to fetch, and OSError when the
    failure ledger cannot be created.
    """
    ledger = FailureLedger(settings.target_dir / FAILURE_LEDGER_NAME)
    recovered = ledger.recover()
    pages = set(requested) | set(recovered)
    if not pages:
        raise ValueError("no range of forum topic pages specified")

    targets = select_pages(pages, recovered, settings)
    ledger.open()
    failed: List[int] = []
    try:
        if targets:
            workers = settings.workers or len(targets)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                future_map = {
                    pool.submit(fetch_topic_page, t, settings, ledger): t
                    for t in targets
                }
                for fut in as_completed(future_map):
                    t = future_map[fut]
                    try:
                        ok = fut.result()
                    except Exception:
                        logging.exception("page %d: unexpected error", t.number)
                        ok = False
                    if not ok:
                        logging.error("page %d could not be fetched", t.number)
                        failed.append(t.number)
    finally:
        ledger.close()
    return sorted(failed)


# -------------------- Config loader --------------------


def load_config_file(path: str) -> Dict[str, Union[str, int, float, bool, List[str]]]:
    p = Path(path)
    suf = p.suffix.lower()
    if suf in {".toml", ".tml"}:
        try:
            import tomllib  # py311+
        except ImportError:
            import tomli as tomllib  # backport
        with open(p, "rb") as f:
            return tomllib.load(f) or {}
    elif suf in {".yaml", ".yml"}:
        import yaml

        with open(p, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise RuntimeError("Top-level YAML must be a mapping")
            return data
    else:
        raise RuntimeError("Unsupported config format. Use .toml or .yaml")


# -------------------- CLI --------------------


def parse_page_range(token: str) -> range:
    m = PAGE_RANGE_RE.match(token.strip())
    if not m:
        raise argparse.ArgumentTypeError(f"invalid page range specification: {token}")
    first = int(m.group(1)) if m.group(1) is not None else FIRST_PAGE
    last = int(m.group(2))
    return range(max(first, FIRST_PAGE), last + 1)


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return n


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="forum-mirror",
        description=(
            "Download the pages of a forum topic for offline viewing. Pages that "
            "failed during the last run are fetched again before anything else."
        ),
        epilog=(
            "A page range looks like `first..last`; a single number N means 1..N. "
            "If no range is given, only the failed downloads of the last run are "
            "reattempted."
        ),
    )
    p.add_argument("--config", type=str, help="path to config.toml|.yaml", default=None)

    p.add_argument(
        "url", help="page URL template; the post offset of each page is appended"
    )
    p.add_argument(
        "ranges",
        nargs="*",
        type=parse_page_range,
        metavar="RANGE",
        help="page range (`first..last` or `last`)",
    )
    p.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="enable overwriting of already fetched pages",
    )
    p.add_argument(
        "-s",
        "--step",
        type=positive_int,
        default=DEFAULT_POST_STEP,
        metavar="POSTS",
        help="number of posts on a single page, used for the page offset in the URL",
    )
    p.add_argument(
        "-t",
        "--target-dir",
        type=str,
        default=None,
        metavar="DIRECTORY",
        help="directory where the pages will be downloaded (default: cwd)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="maximum number of pages fetched at once (default: all)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="request timeout seconds (default: none)",
    )
    return p


def config_page_ranges(tokens, parser: argparse.ArgumentParser) -> List[range]:
    """Page ranges from a config file: a list of tokens or one space-separated string."""
    if isinstance(tokens, (str, int)):
        tokens = str(tokens).split()
    ranges = []
    for token in tokens:
        try:
            ranges.append(parse_page_range(str(token)))
        except argparse.ArgumentTypeError as e:
            parser.error(f"config file: {e}")
    return ranges


def parse_args(
    argv: Optional[List[str]] = None, parser: Optional[argparse.ArgumentParser] = None
) -> argparse.Namespace:
    parser = parser or build_arg_parser()
    preliminary, _ = parser.parse_known_args(argv)
    if preliminary.config:
        cfg = load_config_file(preliminary.config)
        if isinstance(cfg, dict):
            flat = dict(cfg)
            if isinstance(cfg.get("general"), dict):
                flat.update(cfg["general"])
            flat.pop("general", None)
            flat.pop("url", None)
            if "ranges" in flat:
                flat["ranges"] = config_page_ranges(flat["ranges"], parser)
            parser.set_defaults(**{k.replace("-", "_"): v for k, v in flat.items()})
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_arg_parser()
    args = parse_args(argv, parser)

    settings = Settings(
        url_template=args.url,
        target_dir=Path(args.target_dir or os.getcwd()),
        step=args.step,
        force=args.force,
        verbose=args.verbose,
        workers=args.workers,
        timeout=args.timeout,
    )

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    requested = [n for r in args.ranges for n in r]
    try:
        failed = mirror_topic(settings, requested)
    except ValueError as e:
        parser.error(str(e))
    except OSError:
        sys.exit(1)

    if failed:
        print(
            f"{len(failed)} page(s) failed: {', '.join(str(n) for n in failed)} "
            f"(listed in {settings.target_dir / FAILURE_LEDGER_NAME})"
        )
    else:
        print("All pages fetched")


if __name__ == "__main__":
    main()

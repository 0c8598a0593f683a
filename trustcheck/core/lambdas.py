import os
import re
import asyncio
import logging
from urllib.parse import urlparse, quote

import aiohttp
from bs4 import BeautifulSoup
from markdownify import markdownify

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.client_config import ClientConfig
from selenium.webdriver.support.ui import WebDriverWait
from selenium.common.exceptions import TimeoutException, WebDriverException

from trustcheck.core.errors import InvalidInput, FetchError


DEFAULT_FALLBACK_EXTRACTOR_URL = "https://r.jina.ai"
ARTICLE_SELECTOR = "article"
# kept unescaped in the fallback path segment, along with -_.~
_URI_COMPONENT_SAFE = "!'()*"

# Tags that never carry article prose
_NOISE_TAGS = [
    'script', 'style', 'noscript', 'template', 'iframe', 'svg', 'canvas', 'form', 'input', 'button',
    'select', 'textarea', 'nav', 'aside', 'footer', 'video', 'audio', 'object', 'embed', 'meta', 'link',
]


# -----------------------------
# Utilities
# -----------------------------
def _clean_text(text: str) -> str:
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = re.sub(r'[ \t]+\n', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def validate_url(url: str) -> str:
    """Return the stripped URL or raise InvalidInput. Never touches the network."""
    candidate = (url or "").strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        raise InvalidInput(f"Invalid URL: {url!r}")
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInput(f"Invalid URL: {url!r}")
    return candidate


def html_to_markdown(html: str) -> str:
    if not html:
        return ""
    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()
    return _clean_text(markdownify(str(soup), heading_style="ATX"))


# -----------------------------
# Remote browser (selenium grid / browserless)
# -----------------------------
def _connect_remote_browser(endpoint: str) -> webdriver.Remote:
    options = Options()
    options.add_argument("--headless")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    connect_timeout = float(os.environ.get("BROWSER_CONNECT_TIMEOUT", "20"))
    client_config = ClientConfig(remote_server_addr=endpoint, timeout=connect_timeout)
    return webdriver.Remote(command_executor=endpoint, options=options, client_config=client_config)


def _page_settled(driver) -> bool:
    return driver.execute_script("return document.readyState") == "complete"


def render_article_markdown(url: str, endpoint: str) -> str | None:
    """Render ``url`` in the remote browser and return its ``<article>`` region as markdown.

    Returns None when the page has no article region, or when the region is
    empty after trimming. The browser session is always released.
    """
    logging.info(f"🌐 Connecting to remote browser at {endpoint}")
    try:
        driver = _connect_remote_browser(endpoint)
    except Exception as e:
        raise FetchError(f"Remote browser unreachable at {endpoint}: {e}") from e

    page_timeout = float(os.environ.get("BROWSER_PAGE_TIMEOUT", "30"))
    try:
        # the session already exists on the grid from here on
        driver.set_page_load_timeout(page_timeout)
        logging.info(f"📰 Navigating to {url}")
        driver.get(url)
        WebDriverWait(driver, page_timeout).until(_page_settled)

        elements = driver.find_elements(By.CSS_SELECTOR, ARTICLE_SELECTOR)
        if not elements:
            return None
        markdown = html_to_markdown(elements[0].get_attribute("innerHTML") or "")
        return markdown or None
    except TimeoutException as e:
        raise FetchError(f"Timed out rendering {url}: {e}") from e
    except WebDriverException as e:
        raise FetchError(f"Remote browser failed on {url}: {e}") from e
    finally:
        try:
            driver.quit()
        except Exception as e:
            logging.warning(f"Failed to release remote browser session: {e}")


# -----------------------------
# Fallback extraction service
# -----------------------------
async def fetch_with_fallback_service(url: str) -> str:
    base = os.environ.get("FALLBACK_EXTRACTOR_URL", DEFAULT_FALLBACK_EXTRACTOR_URL).rstrip("/")
    endpoint = f"{base}/{quote(url, safe=_URI_COMPONENT_SAFE)}"
    timeout = aiohttp.ClientTimeout(total=float(os.environ.get("FALLBACK_TIMEOUT", "30")))

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(endpoint) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(
                        f"Unable to fetch from {base} with url {url} and status: {response.status}"
                    )
                return await response.text()
    except aiohttp.ClientError as e:
        raise FetchError(f"Fallback extraction service request failed: {url} -> {e}") from e
    except asyncio.TimeoutError as e:
        raise FetchError(f"Fallback extraction service timed out: {url}") from e


# -----------------------------
# Async article fetch orchestrator
# -----------------------------
async def fetch_article_content(url: str) -> str:
    """Fetch the article behind ``url`` as markdown.

    Raises InvalidInput for a malformed URL (before any network call) and
    FetchError when neither the browser nor the fallback service delivers.
    """
    url = validate_url(url)

    endpoint = os.environ.get("BROWSER_WS_ENDPOINT")
    if not endpoint:
        raise FetchError("BROWSER_WS_ENDPOINT is not defined")

    markdown = await asyncio.to_thread(render_article_markdown, url, endpoint)
    if markdown:
        logging.info(f"✅ Article region extracted ({len(markdown)} chars): {url}")
        return markdown

    logging.info(f"No article region found. Using fallback extraction service: {url}")
    text = await fetch_with_fallback_service(url)
    logging.info(f"✅ Fallback extraction complete ({len(text)} chars): {url}")
    return text


async def get_content_as_markdown(url: str) -> str:
    """Like fetch_article_content, but any failure degrades to an empty string."""
    try:
        return await fetch_article_content(url)
    except InvalidInput as e:
        logging.warning(f"⚠️ {e}")
        return ""
    except Exception as e:
        logging.error(f"❌ Error extracting article content: {url} -> {e}")
        return ""

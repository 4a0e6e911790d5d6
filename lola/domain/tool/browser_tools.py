"""
Browser tools.

Each tool is a ToolSpec whose handler receives the shared Playwright page
plus validated arguments and returns a short text observation. Outputs are
kept concise: the planner only needs enough to choose the next action.
Handlers may raise; the executor turns exceptions into error observations.
"""

from typing import Dict, Any, List, Optional
from urllib.parse import quote_plus
import asyncio
import json
import re

from lola.domain.tool.tool_registry import ToolActionError, ToolSpec, ToolRegistry

DEFAULT_EXTRACT_CHARS = 5000
DEFAULT_VISIBLE_TEXT_CHARS = 8000

POPUP_SELECTORS = [
    # Cookie / privacy / consent banners
    '[id*="cookie" i]', '[class*="cookie" i]',
    '[id*="privacy" i]', '[class*="privacy" i]',
    '[id*="consent" i]', '[class*="consent" i]',
    # Terms and accept buttons
    '[id*="terms" i]', '[class*="terms" i]',
    '[id*="accept" i]', '[class*="accept" i]',
    'button:has-text("Accept")', 'button:has-text("I Accept")', 'button:has-text("Agree")',
    'button:has-text("Continue")', 'button:has-text("OK")', 'button:has-text("Got it")',
    'a:has-text("Accept")', 'a:has-text("Continue")', 'a:has-text("I Agree")',
    # Modals and close buttons
    '[role="dialog"]', '.modal', '#modal', '[class*="modal"]',
    'button[aria-label*="close" i]', '.close', '[class*="close"]', '[id*="close"]',
]

FIND_LINKS_SCRIPT = """
elements => elements.slice(0, 50).map((el, i) => {
    const tag = el.tagName.toLowerCase();
    const id = el.id || "";
    const cls = (el.className || "").toString().split(" ")[0] || "";
    let selector = tag;
    if (id) selector = `#${id}`;
    else if (cls) selector = `${tag}.${cls}`;
    return {
        index: i + 1,
        tag,
        text: (el.textContent || "").trim().substring(0, 100),
        href: el.href || null,
        selector,
    };
})
"""

LINKS_SCRIPT = """
anchors => anchors.slice(0, 20).map((a, i) => ({
    index: i + 1, text: (a.innerText || "").trim().substring(0, 100), href: a.href
}))
"""

BUTTONS_SCRIPT = """
buttons => buttons.slice(0, 15).map((b, i) => ({
    index: i + 1, text: (b.innerText || "").trim().substring(0, 100), type: b.type || null
}))
"""

HEADINGS_SCRIPT = """
headings => headings.slice(0, 10).map((h, i) => ({
    index: i + 1, level: h.tagName, text: (h.innerText || "").trim().substring(0, 200)
}))
"""

META_SCRIPT = """
nodes => nodes.map(n => ({
    name: n.getAttribute("name") || n.getAttribute("property"),
    content: (n.getAttribute("content") || "").substring(0, 200),
}))
"""

BODY_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _clip(text: str, max_chars: Optional[int], default: int) -> str:
    limit = max_chars if max_chars is not None else default
    return text.strip()[:limit]


def _schema(properties: Optional[Dict[str, Any]] = None, required: Optional[List[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": properties or {},
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


async def _selector_for(element, tag: str, fallback: str) -> str:
    element_id = await element.get_attribute("id")
    if element_id:
        return f"#{element_id}"
    class_name = await element.get_attribute("class")
    if class_name and class_name.split():
        return f"{tag}.{class_name.split()[0]}"
    return fallback


# Navigation

async def goto(page, url: str) -> str:
    if not re.match(r"^https?://", url):
        raise ToolActionError(f"'{url}' is not an absolute http(s) URL.")
    await page.goto(url, wait_until="domcontentloaded", timeout=30000)
    title = await page.title()
    # Give consent banners a moment to render
    await asyncio.sleep(2)
    return f"Navigated to {url}. Title: {title}. Check for popups using browser_check_popups if needed."


async def get_url(page) -> str:
    return f"Current URL: {page.url}\nTitle: {await page.title()}"


async def back(page) -> str:
    await page.go_back()
    return f"Navigated back. Now at: {page.url} ({await page.title()})"


async def refresh(page) -> str:
    await page.reload(wait_until="domcontentloaded")
    return f"Page refreshed. Title: {await page.title()}. Check for popups if needed."


async def search_google(page, query: str) -> str:
    await page.goto(f"https://www.google.com/search?q={quote_plus(query)}", wait_until="domcontentloaded")
    title = await page.title()
    return (
        f'Opened Google search for "{query}". Title: {title}. '
        "Use browser_check_popups, then browser_analyze_page or browser_extract_text to get results."
    )


async def wait(page, seconds: Optional[float] = None, selector: Optional[str] = None) -> str:
    if selector:
        await page.wait_for_selector(selector, state="visible", timeout=(seconds or 10) * 1000)
        return f'Element "{selector}" is now visible.'
    secs = 2 if seconds is None else seconds
    await asyncio.sleep(secs)
    return f"Waited {secs:g} second(s)."


# Interaction

async def click(page, selector: str) -> str:
    try:
        await page.wait_for_selector(selector, state="visible", timeout=10000)
    except Exception as e:
        raise ToolActionError(
            f"Could not click {selector}: {e}. Try using browser_find_by_text to find the element "
            "by its text content, or browser_find_links to see all clickable links."
        ) from e

    element = await page.query_selector(selector)
    if element is None:
        raise ToolActionError(
            f"Element not found: {selector}. Use browser_find_links or browser_find_by_text to find the correct selector."
        )
    if not await element.is_visible():
        raise ToolActionError(
            f"Element exists but is not visible: {selector}. The element might be hidden or require scrolling."
        )

    await page.click(selector, timeout=15000)
    await asyncio.sleep(1)
    return f"Successfully clicked: {selector}"


async def right_click(page, selector: str) -> str:
    await page.click(selector, button="right", timeout=15000)
    return f"Right-clicked selector: {selector}"


async def double_click(page, selector: str) -> str:
    await page.dblclick(selector, timeout=10000)
    return f"Double-clicked {selector}."


async def type_text(page, selector: str, text: str, press_enter: bool = False) -> str:
    await page.fill(selector, text, timeout=15000)
    if press_enter:
        await page.press(selector, "Enter")
    return f'Typed into {selector}: "{text}"' + (" and pressed Enter" if press_enter else "")


async def scroll(page, dy: float) -> str:
    await page.mouse.wheel(0, dy)
    return f"Scrolled vertically by dy={dy:g}"


async def scroll_to_element(page, selector: str, click_after: bool = False) -> str:
    await page.locator(selector).first.scroll_into_view_if_needed(timeout=10000)
    if click_after:
        await page.click(selector, timeout=5000)
        return f"Scrolled to {selector} and clicked it."
    return f"Scrolled so {selector} is in view."


async def hover(page, selector: str) -> str:
    await page.hover(selector, timeout=10000)
    return f"Hovered over {selector}. Use browser_find_links or browser_click to interact with revealed menu items."


async def press_key(page, key: str) -> str:
    await page.keyboard.press(key)
    return f"Pressed key: {key}"


async def select_option(page, selector: str, value: Optional[str] = None, label: Optional[str] = None) -> str:
    if value:
        await page.select_option(selector, value=value, timeout=10000)
    elif label:
        await page.select_option(selector, label=label, timeout=10000)
    else:
        raise ToolActionError("Provide either value or label for the option to select.")
    return f"Selected option in {selector}."


async def checkbox(page, selector: str, check: bool) -> str:
    if check:
        await page.check(selector, timeout=10000)
    else:
        await page.uncheck(selector, timeout=10000)
    return f"{'Checked' if check else 'Unchecked'} {selector}."


async def upload_file(page, selector: str, path: str) -> str:
    await page.set_input_files(selector, path, timeout=10000)
    return f"Set file input {selector} to {path}."


async def fill_and_submit_search(page, selector: str, query: str, submit_selector: Optional[str] = None) -> str:
    await page.fill(selector, query, timeout=10000)
    if submit_selector:
        await page.click(submit_selector, timeout=5000)
    else:
        await page.press(selector, "Enter")
    await asyncio.sleep(2)
    return f"Submitted search. Current URL: {page.url}. Use browser_analyze_page or browser_extract_text to get results."


async def screenshot(page, path: str) -> str:
    await page.screenshot(path=path, full_page=True)
    return f"Saved screenshot to {path}"


# Reading

async def extract_text(page, selector: str, max_chars: Optional[int] = None) -> str:
    element = await page.query_selector(selector)
    if element is None:
        return f"No element found for selector: {selector}"
    clipped = _clip(await element.inner_text(), max_chars, DEFAULT_EXTRACT_CHARS)
    return f"Extracted text ({len(clipped)} chars) from {selector}:\n{clipped}"


async def extract_visible_text(page, max_chars: Optional[int] = None) -> str:
    text = await page.evaluate(BODY_TEXT_SCRIPT)
    clipped = _clip(text or "", max_chars, DEFAULT_VISIBLE_TEXT_CHARS)
    return f"Visible text ({len(clipped)} chars):\n{clipped}"


async def extract_multiple(page, selector: str, max_items: Optional[int] = None) -> str:
    elements = await page.query_selector_all(selector)
    limit = max_items or 10
    items = []

    for index, element in enumerate(elements[:limit]):
        try:
            items.append({
                "index": index + 1,
                "tag": await element.evaluate("el => el.tagName.toLowerCase()"),
                "text": (await element.inner_text()).strip()[:500],
                "href": await element.get_attribute("href"),
            })
        except Exception:
            # Detached or unreadable nodes are skipped
            continue

    return f"Found {len(elements)} elements, extracted {len(items)} items:\n{_dump(items)}"


async def find_by_text(page, text: str, exact: bool = False) -> str:
    if exact:
        elements = await page.get_by_text(text, exact=True).all()
    else:
        elements = await page.get_by_text(re.compile(re.escape(text), re.IGNORECASE)).all()

    if not elements:
        return f'No elements found containing text: "{text}". Try using browser_find_links to see all clickable elements.'

    results = []
    for index, element in enumerate(elements[:10]):
        try:
            tag = await element.evaluate("el => el.tagName.toLowerCase()")
            results.append({
                "index": index + 1,
                "tag": tag,
                "visible": await element.is_visible(),
                "selector": await _selector_for(element, tag, f'{tag}:has-text("{text}")'),
                "text": (await element.inner_text()).strip()[:100],
                "href": await element.get_attribute("href") if tag == "a" else None,
            })
        except Exception:
            continue

    if not results:
        return f"Found {len(elements)} element(s) but couldn't extract details. Try using browser_find_links instead."
    return f'Found {len(results)} element(s) containing "{text}":\n{_dump(results)}'


async def find_links(page, max_links: Optional[int] = None) -> str:
    links = await page.eval_on_selector_all("a, button, [onclick], [role='button']", FIND_LINKS_SCRIPT)
    limited = links[:max_links or 20]
    return f"Found {len(links)} clickable elements:\n{_dump(limited)}"


async def check_popups(page) -> str:
    found = []
    seen = set()

    for selector in POPUP_SELECTORS:
        try:
            elements = await page.query_selector_all(selector)
        except Exception:
            continue

        for element in elements:
            try:
                if not await element.is_visible():
                    continue
                tag = await element.evaluate("el => el.tagName.toLowerCase()")
                clickable = await _selector_for(element, tag, selector)
                if clickable in seen:
                    continue
                seen.add(clickable)

                lowered = selector.lower()
                kind = "popup"
                for marker in ("cookie", "terms", "accept"):
                    if marker in lowered:
                        kind = marker
                        break

                found.append({
                    "selector": clickable,
                    "tag": tag,
                    "text": (await element.inner_text()).strip()[:100],
                    "type": kind,
                })
            except Exception:
                continue

    if not found:
        return "No popups, modals, or overlays detected on the page."

    return (
        f"Found {len(found)} popup/modal(s):\n{_dump(found)}\n\n"
        "Use browser_click with one of the selectors to dismiss the popup. "
        'Look for buttons with text like "Accept", "Continue", "I Agree", or "OK".'
    )


async def analyze_page(page, what_to_look_for: Optional[str] = None) -> str:
    body_text = await page.evaluate(BODY_TEXT_SCRIPT) or ""
    links = await page.eval_on_selector_all("a", LINKS_SCRIPT)
    buttons = await page.eval_on_selector_all("button, [role='button']", BUTTONS_SCRIPT)
    headings = await page.eval_on_selector_all("h1, h2, h3", HEADINGS_SCRIPT)

    analysis = {
        "url": page.url,
        "title": await page.title(),
        "contentPreview": body_text[:500],
        "links": len(links),
        "buttons": len(buttons),
        "headings": len(headings),
        "topLinks": links[:5],
        "topButtons": buttons[:5],
        "topHeadings": headings[:5],
    }
    if what_to_look_for:
        analysis["lookingFor"] = what_to_look_for

    return (
        f"Page Analysis:\n{_dump(analysis)}\n\n"
        "Use this information to understand the page structure and decide what to click or extract next."
    )


async def get_meta(page) -> str:
    meta = await page.eval_on_selector_all("meta[name], meta[property]", META_SCRIPT)
    title = await page.title()
    description = next((m for m in meta if m.get("name") in ("description", "og:description")), None)
    result = f"Title: {title}\nMeta: {_dump(meta[:15])}"
    if description:
        result += f"\nDescription: {description.get('content')}"
    return result


async def get_cookies(page) -> str:
    cookies = await page.context.cookies()
    summary = [{"name": c["name"], "domain": c["domain"], "path": c["path"]} for c in cookies]
    return f"Cookies ({len(cookies)}): {_dump(summary)}"


async def get_console_errors(page) -> str:
    logs: List[str] = []

    def on_console(message):
        if message.type in ("error", "warning"):
            logs.append(f"[{message.type}] {message.text}")

    page.on("console", on_console)
    try:
        await asyncio.sleep(0.5)
    finally:
        page.remove_listener("console", on_console)

    if not logs:
        return "No console errors or warnings in the last 500ms. Errors may have occurred earlier during page load."
    return "Console messages:\n" + "\n".join(logs[:20])


# Frames

def _frame_at(page, frame_index: int):
    frames = page.frames
    if frame_index < 0 or frame_index >= len(frames):
        raise ToolActionError(
            f"Invalid frame index {frame_index}. Page has {len(frames)} frames "
            f"(0 to {len(frames) - 1}). Use browser_list_frames to see frames."
        )
    return frames[frame_index]


async def list_frames(page) -> str:
    info = [{"index": i, "url": f.url, "name": f.name or None} for i, f in enumerate(page.frames)]
    return (
        f"Frames: {_dump(info)}. Use browser_frame_click or browser_frame_extract_text "
        "with the frame index to interact inside an iframe."
    )


async def frame_click(page, frame_index: int, selector: str) -> str:
    frame = _frame_at(page, frame_index)
    await frame.click(selector, timeout=10000)
    return f"Clicked {selector} in frame {frame_index}."


async def frame_extract_text(page, frame_index: int, selector: str) -> str:
    frame = _frame_at(page, frame_index)
    element = await frame.query_selector(selector)
    if element is None:
        return f"No element found in frame {frame_index} for selector: {selector}"
    clipped = _clip(await element.inner_text(), None, DEFAULT_EXTRACT_CHARS)
    return f"Frame {frame_index} content ({len(clipped)} chars):\n{clipped}"


_STRING = {"type": "string"}
_SELECTOR = {"type": "string", "minLength": 1, "description": "CSS selector"}
_OPTIONAL_NUMBER = {"type": "number"}
_FRAME_INDEX = {"type": "integer", "minimum": 0}


def create_browser_tools() -> List[ToolSpec]:
    """The full browser action catalog"""

    return [
        ToolSpec(
            name="browser_goto", handler=goto, category="navigation",
            description="Navigate the browser to a URL. After navigation, check for popups (cookies, terms, etc.) using browser_check_popups and handle them if present.",
            parameters=_schema({"url": {"type": "string", "minLength": 1}}, ["url"]),
            timeout=45,
        ),
        ToolSpec(
            name="browser_click", handler=click, category="interaction",
            description="Left click an element using a CSS selector. The element must be visible and clickable. If the selector doesn't work, use browser_find_by_text or browser_find_links first.",
            parameters=_schema({"selector": _SELECTOR}, ["selector"]),
        ),
        ToolSpec(
            name="browser_right_click", handler=right_click, category="interaction",
            description="Right click an element using a CSS selector.",
            parameters=_schema({"selector": _SELECTOR}, ["selector"]),
        ),
        ToolSpec(
            name="browser_double_click", handler=double_click, category="interaction",
            description="Double-click an element. Use for elements that require double-click to activate.",
            parameters=_schema({"selector": _SELECTOR}, ["selector"]),
        ),
        ToolSpec(
            name="browser_type", handler=type_text, category="interaction",
            description="Type into an input/textarea using a CSS selector. Optionally press Enter.",
            parameters=_schema(
                {"selector": _SELECTOR, "text": _STRING, "press_enter": {"type": "boolean"}},
                ["selector", "text"]
            ),
        ),
        ToolSpec(
            name="browser_scroll", handler=scroll, category="interaction",
            description="Scroll the page vertically by dy pixels (positive = down, negative = up).",
            parameters=_schema({"dy": {"type": "number"}}, ["dy"]),
        ),
        ToolSpec(
            name="browser_screenshot", handler=screenshot, category="capture",
            description="Take a full-page screenshot and save it to a file path.",
            parameters=_schema({"path": {"type": "string", "minLength": 1}}, ["path"]),
        ),
        ToolSpec(
            name="browser_extract_text", handler=extract_text, category="extraction",
            description="Extract innerText from a CSS selector. Use this to read article content, headlines, or any text on the page. Default extracts up to 5000 characters. Use 'body' or 'main' selector to get all page content.",
            parameters=_schema({"selector": _SELECTOR, "max_chars": {"type": "integer", "minimum": 1}}, ["selector"]),
        ),
        ToolSpec(
            name="browser_find_by_text", handler=find_by_text, category="discovery",
            description="Find clickable elements by their text content. Returns selectors you can use with browser_click. Use this when you know the text but not the selector.",
            parameters=_schema({"text": {"type": "string", "minLength": 1}, "exact": {"type": "boolean"}}, ["text"]),
        ),
        ToolSpec(
            name="browser_find_links", handler=find_links, category="discovery",
            description="Find all clickable links, buttons, and interactive elements on the page. Returns their text, href, and selectors. Use this to find navigation menus, article links, etc.",
            parameters=_schema({"max_links": {"type": "integer", "minimum": 1}}),
        ),
        ToolSpec(
            name="browser_extract_multiple", handler=extract_multiple, category="extraction",
            description="Extract multiple elements matching a selector (e.g., all article links, all headlines). Returns an array of items with their text and href.",
            parameters=_schema({"selector": _SELECTOR, "max_items": {"type": "integer", "minimum": 1}}, ["selector"]),
        ),
        ToolSpec(
            name="browser_check_popups", handler=check_popups, category="discovery",
            description="Check for popups, modals, cookie banners, terms dialogs, or other overlays on the current page. Returns selectors you can use to dismiss them. ALWAYS call this after navigating to a new page.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_analyze_page", handler=analyze_page, category="discovery",
            description="Analyze the current page structure. Returns page title, URL, links, buttons, headings, and content preview. Call this after navigating to understand the page layout.",
            parameters=_schema({"what_to_look_for": _STRING}),
        ),
        ToolSpec(
            name="browser_get_url", handler=get_url, category="navigation",
            description="Get the current page URL and title. Use when you need to confirm where you are or report the page to the user.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_back", handler=back, category="navigation",
            description="Go back to the previous page in browser history. Use after opening an article to return to the list, or to undo a navigation.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_wait", handler=wait, category="navigation",
            description="Wait for an element to appear (by selector) or wait a number of seconds. Use when the page loads content dynamically.",
            parameters=_schema({"seconds": {"type": "number", "minimum": 0, "maximum": 30}, "selector": _SELECTOR}),
            timeout=45,
        ),
        ToolSpec(
            name="browser_hover", handler=hover, category="interaction",
            description="Hover over an element. Use for dropdown menus that only appear on hover. After hovering, use browser_find_links to see the menu options.",
            parameters=_schema({"selector": _SELECTOR}, ["selector"]),
        ),
        ToolSpec(
            name="browser_press_key", handler=press_key, category="interaction",
            description="Press a keyboard key. Common keys: Escape (close modals), Enter (submit), Tab (next field), ArrowDown/ArrowUp.",
            parameters=_schema({"key": {"type": "string", "minLength": 1}}, ["key"]),
        ),
        ToolSpec(
            name="browser_refresh", handler=refresh, category="navigation",
            description="Refresh/reload the current page. Use when the page failed to load correctly or content is stale.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_select_option", handler=select_option, category="forms",
            description="Select an option in a dropdown (select element). Use value (option value attribute) or label (visible text).",
            parameters=_schema({"selector": _SELECTOR, "value": _STRING, "label": _STRING}, ["selector"]),
        ),
        ToolSpec(
            name="browser_checkbox", handler=checkbox, category="forms",
            description="Check or uncheck a checkbox or radio. Use check: true to check, check: false to uncheck.",
            parameters=_schema({"selector": _SELECTOR, "check": {"type": "boolean"}}, ["selector", "check"]),
        ),
        ToolSpec(
            name="browser_upload_file", handler=upload_file, category="forms",
            description="Set a file on an input type=file. path must be an absolute path to a file on the machine running the browser.",
            parameters=_schema({"selector": _SELECTOR, "path": {"type": "string", "minLength": 1}}, ["selector", "path"]),
        ),
        ToolSpec(
            name="browser_search_google", handler=search_google, category="navigation",
            description="Open Google and run a search query. Use when the user wants to search the web. Then extract or analyze the results page.",
            parameters=_schema({"query": {"type": "string", "minLength": 1}}, ["query"]),
            timeout=45,
        ),
        ToolSpec(
            name="browser_fill_and_submit_search", handler=fill_and_submit_search, category="forms",
            description="Type into a search box and submit (Enter or click submit button). submit_selector is optional; if omitted, Enter is pressed in the field.",
            parameters=_schema(
                {"selector": _SELECTOR, "query": _STRING, "submit_selector": _SELECTOR},
                ["selector", "query"]
            ),
        ),
        ToolSpec(
            name="browser_list_frames", handler=list_frames, category="frames",
            description="List all iframes on the current page. Use browser_frame_click or browser_frame_extract_text with the frame index to interact inside an iframe.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_frame_click", handler=frame_click, category="frames",
            description="Click an element inside an iframe. Use frame_index from browser_list_frames and a CSS selector.",
            parameters=_schema({"frame_index": _FRAME_INDEX, "selector": _SELECTOR}, ["frame_index", "selector"]),
        ),
        ToolSpec(
            name="browser_frame_extract_text", handler=frame_extract_text, category="frames",
            description="Extract text from an element inside an iframe. Use frame_index from browser_list_frames.",
            parameters=_schema({"frame_index": _FRAME_INDEX, "selector": _SELECTOR}, ["frame_index", "selector"]),
        ),
        ToolSpec(
            name="browser_scroll_to_element", handler=scroll_to_element, category="interaction",
            description="Scroll the page so an element is in view. Optionally click it after scrolling (click_after: true).",
            parameters=_schema({"selector": _SELECTOR, "click_after": {"type": "boolean"}}, ["selector"]),
        ),
        ToolSpec(
            name="browser_get_console_errors", handler=get_console_errors, category="debugging",
            description="Get JavaScript console errors/warnings from the page (captures messages for 500ms). Use for debugging when the page behaves oddly.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_get_cookies", handler=get_cookies, category="debugging",
            description="List cookies for the current browser context. Use to check login or consent state.",
            parameters=_schema(),
        ),
        ToolSpec(
            name="browser_extract_visible_text", handler=extract_visible_text, category="extraction",
            description="Get all visible text from the page (no selector). Useful for a quick full-page read. Optionally limit length with max_chars.",
            parameters=_schema({"max_chars": {"type": "integer", "minimum": 1}}),
        ),
        ToolSpec(
            name="browser_get_meta", handler=get_meta, category="extraction",
            description="Get page title and meta tags (description, og:title, etc.) for a quick summary of the page.",
            parameters=_schema(),
        ),
    ]


def create_browser_tool_registry() -> ToolRegistry:
    return ToolRegistry(create_browser_tools())

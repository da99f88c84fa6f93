"""
Course Link Synthesis.

Builds a platform search URL for a recommended course when the analyzer did
not return a usable direct link. Pure functions, no network I/O.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

# Search URL templates per platform, {query} is the URL-encoded course title
PLATFORM_SEARCH_URLS = {
    "Coursera": "https://www.coursera.org/search?query={query}",
    "Udemy": "https://www.udemy.com/courses/search/?q={query}",
    "Pluralsight": "https://www.pluralsight.com/search?q={query}",
    "edX": "https://www.edx.org/search?q={query}",
    "LinkedIn Learning": "https://www.linkedin.com/learning/search?keywords={query}",
    "Udacity": "https://www.udacity.com/courses/all?search={query}",
    "Khan Academy": "https://www.khanacademy.org/search?page_search_query={query}",
}

# Generic web search for platforms without a template
GENERIC_SEARCH_URL = "https://www.google.com/search?q={query}+course+{platform}"


def encode_component(value: str) -> str:
    """URL-encode a query component the way browsers' encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")


def url_for(platform: str, title: str) -> str:
    """Return a search URL for a course title on the given platform.

    Args:
        platform: Platform name, e.g. "Udemy". Unknown platforms use a generic
            web search that includes the platform name.
        title: Course title used as the search query.

    Returns:
        str: The synthesized search URL.

    Example:
        >>> url_for("Udemy", "Go Basics")
        'https://www.udemy.com/courses/search/?q=Go%20Basics'
    """
    query = encode_component(title)
    template = PLATFORM_SEARCH_URLS.get(platform)
    if template:
        return template.format(query=query)
    return GENERIC_SEARCH_URL.format(
        query=query, platform=encode_component(platform or "")
    )


def has_usable_url(url: Optional[str]) -> bool:
    """Return True if the url is an absolute http(s) link."""
    if not url or not isinstance(url, str):
        return False
    return url.strip().lower().startswith(("http://", "https://"))


def fill_course_urls(courses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Return the courses with a synthesized url wherever none is usable."""
    filled = []
    for course in courses:
        course = dict(course)
        if not has_usable_url(course.get("url")):
            course["url"] = url_for(course.get("platform", ""), course.get("title", ""))
        filled.append(course)
    return filled

from bs4 import BeautifulSoup


def extract_title(body):
    """Return the text of the first non-empty <title> element, or an empty string."""
    try:
        soup = BeautifulSoup(body, "html.parser")
    except Exception:
        return ""
    for tag in soup.find_all("title"):
        title = tag.get_text(strip=True)
        if title:
            return title
    return ""

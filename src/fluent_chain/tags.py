"""
Table of tag-specific locate methods.

Each entry generates a find-one and a find-many method on a chain class, e.g.
``span(locator=None)`` and ``spans(locator=None)``, both asserting that what
they found really is a ``<span>``.
"""

TAGS: tuple[tuple[str, str, str], ...] = (
    # (find-one method, find-many method, tag name)
    ("link", "links", "a"),
    ("abbr", "abbrs", "abbr"),
    ("acronym", "acronyms", "acronym"),
    ("address", "addresses", "address"),
    ("b", "bs", "b"),
    ("body", "bodies", "body"),
    ("button", "buttons", "button"),
    ("caption", "captions", "caption"),
    ("code", "codes", "code"),
    ("col", "cols", "col"),
    ("dd", "dds", "dd"),
    ("div", "divs", "div"),
    ("dl", "dls", "dl"),
    ("dt", "dts", "dt"),
    ("em", "ems", "em"),
    ("fieldset", "fieldsets", "fieldset"),
    ("form", "forms", "form"),
    ("h1", "h1s", "h1"),
    ("h2", "h2s", "h2"),
    ("h3", "h3s", "h3"),
    ("h4", "h4s", "h4"),
    ("h5", "h5s", "h5"),
    ("h6", "h6s", "h6"),
    ("header", "headers", "header"),
    ("footer", "footers", "footer"),
    ("iframe", "iframes", "iframe"),
    ("img", "imgs", "img"),
    ("input", "inputs", "input"),
    ("label", "labels", "label"),
    ("legend", "legends", "legend"),
    ("li", "lis", "li"),
    ("map", "maps", "map"),
    ("nav", "navs", "nav"),
    ("object", "objects", "object"),
    ("ol", "ols", "ol"),
    ("optgroup", "optgroups", "optgroup"),
    ("option", "options", "option"),
    ("p", "ps", "p"),
    ("pre", "pres", "pre"),
    ("section", "sections", "section"),
    ("select", "selects", "select"),
    ("span", "spans", "span"),
    ("table", "tables", "table"),
    ("tbody", "tbodies", "tbody"),
    ("td", "tds", "td"),
    ("textarea", "textareas", "textarea"),
    ("tfoot", "tfoots", "tfoot"),
    ("th", "ths", "th"),
    ("thead", "theads", "thead"),
    ("tr", "trs", "tr"),
    ("ul", "uls", "ul"),
)


# Locate method name to the (tag, multiplicity) it asserts.
LOCATE_METHODS: dict[str, tuple[str | None, str]] = {
    "element": (None, "single"),
    "elements": (None, "many"),
    **{single: (tag, "single") for single, _, tag in TAGS},
    **{many: (tag, "many") for _, many, tag in TAGS},
}

def _single_method(method: str, tag: str):
    def find_one(self, locator=None):
        return self._locate(method, tag, locator, "single")

    find_one.__name__ = method
    find_one.__doc__ = f"Finds one <{tag}> element, optionally narrowed by ``locator``."
    return find_one


def _many_method(method: str, tag: str):
    def find_many(self, locator=None):
        return self._locate(method, tag, locator, "many")

    find_many.__name__ = method
    find_many.__doc__ = f"Finds every <{tag}> element, optionally narrowed by ``locator``."
    return find_many


def install_tag_methods(cls):
    """Class decorator adding every tag method from TAGS to a chain class."""
    for single, many, tag in TAGS:
        setattr(cls, single, _single_method(single, tag))
        setattr(cls, many, _many_method(many, tag))
    return cls

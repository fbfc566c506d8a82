"""Small element-construction layer over ``xml.etree.ElementTree``.

``E(tag, attrs, children)`` builds elements declaratively; the helpers below
patch a live tree in place and serialize it to an HTML fragment.
"""

import xml.etree.ElementTree as ET

from markupsafe import escape

Element = ET.Element


def E(tag, attrs=None, children=None):
    """Build an element. ``children`` may be a string, an element, or a list
    mixing both; strings become text/tail so the order is preserved."""
    el = ET.Element(tag, {k: str(v) for k, v in (attrs or {}).items() if v is not None})
    if children is None:
        return el
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if isinstance(child, ET.Element):
            el.append(child)
        elif child is not None:
            _append_text(el, str(child))
    return el


def _append_text(el, text):
    if len(el):
        last = el[-1]
        last.tail = (last.tail or "") + text
    else:
        el.text = (el.text or "") + text


def remove_children(el):
    for child in list(el):
        el.remove(child)
    el.text = None


def text_content(el):
    return "".join(el.itertext())


def set_text(el, text):
    """Replace the element's content with plain text. Returns False when the
    element already showed exactly this text."""
    if len(el) == 0 and (el.text or "") == text:
        return False
    remove_children(el)
    el.text = text
    return True


def replace_children(el, children):
    remove_children(el)
    for child in children:
        el.append(child)


def inner_html(el):
    return str(escape(el.text or "")) + "".join(to_html(child) for child in el)


def to_html(el):
    return ET.tostring(el, encoding="unicode", method="html")

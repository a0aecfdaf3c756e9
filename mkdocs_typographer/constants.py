NBSP = "\u00a0"  # non-breaking space
NNBSP = "\u202f"  # narrow non-breaking space
THIN = "\u2009"  # thin space
ELLIPSIS = "…"
EN_DASH = "–"
EM_DASH = "—"

SKIP_TAGS = {"code", "pre", "kbd", "samp", "var", "script", "style", "math"}

IGNORE_DIRECTIVE = "typo-ignore"

# Text nodes under the same nearest block element are corrected together.
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "body", "caption", "dd",
    "details", "div", "dl", "dt", "figcaption", "figure", "footer", "h1",
    "h2", "h3", "h4", "h5", "h6", "header", "li", "main", "nav", "ol", "p",
    "section", "summary", "table", "td", "th", "tr", "ul",
}

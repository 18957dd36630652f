"""
Final assembly of the bundled text.

The resolver already returns fully expanded, ordered text, so rendering is a
passthrough. Post-processing of the whole bundle belongs here.
"""


def render(expanded_text):
    """Return the final bundle text for an expanded root file."""
    return expanded_text

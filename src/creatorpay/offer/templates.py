"""Text templates for outbound offers and shareable results.

Templates use Python string placeholders ({variable_name}); every value is
pre-formatted by the composer before substitution.
"""

OFFER_TEMPLATE = """{greeting}

Based on your average of {views} views per video, we'd like to offer \
{payout} per video ({cpm} CPM).

Package: {package_label} ({post_count} x {payout})
Total: {total}

Let us know if this works for you and we'll send over the details."""

SHARE_TEMPLATE = """I should be making ~{payout} per post based on my stats 👀

Check what you should be earning →"""

BREAKDOWN_NOTE_TEMPLATE = (
    "Based on your content driving app installs at a {avg_ltv} average customer "
    "lifetime value, with a {revenue_share} creator revenue share."
)

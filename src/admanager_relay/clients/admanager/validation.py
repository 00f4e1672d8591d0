"""Input validation utilities for Ad Manager report queries."""

import re


class AdManagerInputValidator:
    """Validates inputs that end up in Ad Manager report statements."""

    CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")
    MAX_CAMPAIGN_TAG_LENGTH = 255

    @classmethod
    def validate_campaign_tag(cls, campaign_tag: str) -> str:
        """Validate a campaign tag used as an ad unit name filter.

        The tag is always sent as a bind variable; this only rejects values no
        ad unit name could contain.

        Args:
            campaign_tag: Campaign tag to validate

        Returns:
            The stripped campaign tag

        Raises:
            ValueError: If the tag is empty, too long or has control characters
        """
        if not isinstance(campaign_tag, str):
            campaign_tag = str(campaign_tag)

        campaign_tag = campaign_tag.strip()
        if not campaign_tag:
            raise ValueError("Campaign tag must not be empty")
        if len(campaign_tag) > cls.MAX_CAMPAIGN_TAG_LENGTH:
            raise ValueError(
                f"Campaign tag exceeds {cls.MAX_CAMPAIGN_TAG_LENGTH} characters"
            )
        if cls.CONTROL_CHARACTERS.search(campaign_tag):
            raise ValueError("Campaign tag contains control characters")

        return campaign_tag

"""Channel selection from user notification preferences."""

from core.enums import Channel, NotificationCategory
from core.models import User

_IN_APP_PREF_KEYS = ("inApp", "inapp")


def pick_channels(
    user: User | None,
    category: NotificationCategory = NotificationCategory.SYSTEM,
) -> list[Channel]:
    """Return the channels a notification for ``user`` should request.

    Every channel is on unless the user's preferences explicitly turn it off.
    WhatsApp also requires the user to have opted in. ``category`` is carried
    for per-category preferences and does not change the selection yet.

    Returns:
        Channels in the order email, inapp, whatsapp.
    """
    prefs = (user.notify_prefs if user else None) or {}

    channels = []
    if prefs.get("email") is not False:
        channels.append(Channel.EMAIL)

    in_app_values = [prefs[key] for key in _IN_APP_PREF_KEYS if key in prefs]
    if not in_app_values or any(value is not False for value in in_app_values):
        channels.append(Channel.IN_APP)

    if user is not None and user.whatsapp_opt_in and prefs.get("whatsapp") is not False:
        channels.append(Channel.WHATSAPP)

    return channels

from __future__ import annotations

from django.utils.translation import gettext_lazy as _

# Root of every humanization key:
# <namespace>.<app_label>.<model_name>.<attribute>.<value>
DEFAULT_TRANSLATION_NAMESPACE = "assignable_values"

DEFAULT_TRANSLATOR = "assignable_values.translation.SettingsTranslator"

# Attribute consulted by ``authorize_values_for``.
DEFAULT_AUTHORIZATION_DELEGATE = "power"

# Formatted with %(value)s; a literal percent sign is written %%.
INCLUSION_ERROR_KEY = "errors.messages.inclusion"
INCLUSION_ERROR_CODE = "inclusion"
INCLUSION_ERROR_MESSAGE = _("is not included in the list")

HUMANIZED_SEPARATOR = ", "

RESTRICTION_OPTIONS = frozenset(
    {
        "through",
        "default",
        "secondary_default",
        "allow_blank",
        "if_",
        "unless",
    },
)

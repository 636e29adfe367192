"""Setup screen: persisted preferences and the form that starts a game."""

from taboo.setup.form import SetupForm
from taboo.setup.preferences import PreferencesStore, SetupValues

__all__ = ["PreferencesStore", "SetupForm", "SetupValues"]

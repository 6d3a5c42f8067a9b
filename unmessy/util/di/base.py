from dishka import Provider as DishkaProvider

from unmessy.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for Unmessy providers. Dependencies default to the UOW scope."""

    scope = Scope.UOW

from dishka import Provider as DishkaProvider


class Provider(DishkaProvider):
    """Base for the archive's DI providers."""

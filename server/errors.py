class StoryboardError(Exception):
    """Base class for everything the storyboard service raises on purpose."""


class ValidationError(StoryboardError):
    """Caller input was rejected before any request left the process."""


class GenerationError(StoryboardError):
    """The batch of panel requests failed as a whole."""


class TransportError(GenerationError):
    """The call to the image model could not complete."""


class ExtractionError(GenerationError):
    """The model answered but one of the responses carried no image."""


class ConfigurationError(StoryboardError):
    """Required process configuration is missing; raised once at startup."""


class StoryboardClientError(StoryboardError):
    """The storyboard endpoint returned an error or a malformed body."""

"""
Storyboard Toolkit

Turns source documents and a free-text objective into a schema-validated
executive slide deck, or a single infographic image, and renders decks
to typed slide views and PowerPoint.
"""

__version__ = "0.1.0"

from .schema import (
    Deck,
    Slide,
    SlideContent,
    SlideLayout,
    ChartPoint,
    KpiEntry,
    FileInput,
    deck_response_schema,
)

from .config import (
    SynthesisConfig,
    load_config,
    save_config,
)

from .errors import (
    StoryboardError,
    ConfigurationError,
    EmptyInputError,
    GenerationServiceError,
    SynthesisFormatError,
    SynthesisSchemaError,
    ImageSynthesisError,
    SessionBusyError,
    AttachmentError,
)

from .request import (
    SynthesisRequest,
    build_deck_request,
    build_brief_request,
)

from .acceptor import (
    accept_deck,
)

from .service import (
    ContentPart,
    GenerationService,
    GeminiService,
)

from .infographic import (
    InfographicPipeline,
    InfographicResult,
    save_infographic,
)

from .renderer import (
    render_slide,
    kpi_delta_is_positive,
)

from .navigator import (
    DeckNavigator,
)

from .export import (
    deck_to_json,
    save_deck,
    load_deck,
    validate_deck_json,
)

from .pptx_render import (
    render_deck_to_pptx,
)

from .attachments import (
    load_attachment,
    collect_attachments,
)

from .session import (
    SynthesisSession,
    SessionStatus,
    GenerationMode,
)

__all__ = [
    # Schema
    'Deck',
    'Slide',
    'SlideContent',
    'SlideLayout',
    'ChartPoint',
    'KpiEntry',
    'FileInput',
    'deck_response_schema',
    # Config
    'SynthesisConfig',
    'load_config',
    'save_config',
    # Errors
    'StoryboardError',
    'ConfigurationError',
    'EmptyInputError',
    'GenerationServiceError',
    'SynthesisFormatError',
    'SynthesisSchemaError',
    'ImageSynthesisError',
    'SessionBusyError',
    'AttachmentError',
    # Synthesis
    'SynthesisRequest',
    'build_deck_request',
    'build_brief_request',
    'accept_deck',
    'ContentPart',
    'GenerationService',
    'GeminiService',
    'InfographicPipeline',
    'InfographicResult',
    'save_infographic',
    # Rendering
    'render_slide',
    'kpi_delta_is_positive',
    'DeckNavigator',
    'render_deck_to_pptx',
    # Export
    'deck_to_json',
    'save_deck',
    'load_deck',
    'validate_deck_json',
    # Attachments
    'load_attachment',
    'collect_attachments',
    # Session
    'SynthesisSession',
    'SessionStatus',
    'GenerationMode',
]

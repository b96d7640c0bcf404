"""API routes for ChromaGen."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from chromagen.api.schemas import (
    BonusClaimResponse,
    ColorTokenIn,
    ColorTokenResponse,
    ConsumeResponse,
    ContrastEntryResponse,
    ContrastPairResponse,
    ContrastRatingResponse,
    ContrastReportResponse,
    ContrastRequest,
    DarkVariantResponse,
    ExportRequest,
    ExportResponse,
    GenerateRequest,
    GenerateResponse,
    HealthResponse,
    PreviewRequest,
    PreviewResponse,
    ShadesResponse,
    UsageStatusResponse,
)
from chromagen.config import get_settings
from chromagen.container import (
    get_captcha_verifier,
    get_color_scheme_generator,
    get_palette_service,
    get_usage_service,
)
from chromagen.design_system.color import (
    calculate_dark_variant,
    classify_role,
    generate_shades,
    get_contrast_ratio,
    get_wcag_rating,
    is_valid_hex,
)
from chromagen.design_system.themes import generate_css_root
from chromagen.domain.colors import Palette
from chromagen.exceptions import InvalidHexColorError, QuotaExceededError
from chromagen.logging_config import get_logger
from chromagen.services.interfaces import (
    CaptchaVerifier,
    ColorSchemeGenerator,
    PaletteService,
    UsageService,
)

logger = get_logger(__name__)

UNKNOWN_CLIENT = "unknown"

# Create routers
health_router = APIRouter(tags=["health"])
usage_router = APIRouter(prefix="/usage", tags=["usage"])
palette_router = APIRouter(prefix="/palettes", tags=["palettes"])
color_router = APIRouter(prefix="/colors", tags=["colors"])

UsageServiceDep = Annotated[UsageService, Depends(get_usage_service)]
PaletteServiceDep = Annotated[PaletteService, Depends(get_palette_service)]
CaptchaVerifierDep = Annotated[CaptchaVerifier, Depends(get_captcha_verifier)]
GeneratorDep = Annotated[ColorSchemeGenerator, Depends(get_color_scheme_generator)]


def get_client_ip(request: Request) -> str:
    """Caller address used as the quota identifier.

    Checked in order: ``cf-connecting-ip``, the first ``x-forwarded-for``
    entry, the socket peer.
    """
    cf_ip = request.headers.get("cf-connecting-ip", "").strip()
    if cf_ip:
        return cf_ip
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


ClientIP = Annotated[str, Depends(get_client_ip)]


def parse_hex(value: str) -> str:
    """Accept ``rrggbb`` or ``#rrggbb``; anything else is a 422."""
    candidate = value if value.startswith("#") else f"#{value}"
    if not is_valid_hex(candidate):
        raise InvalidHexColorError(value)
    return candidate


def build_palette(
    palette_service: PaletteService, colors: list[ColorTokenIn]
) -> Palette:
    palette = Palette()
    for color in colors:
        token = palette_service.create_token(
            color.name, color.hex, color.role, color.dark_hex
        )
        if color.id:
            token.id = color.id
        palette.add(token)
    return palette


# Health endpoints
@health_router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=get_settings().app_version)


# Usage endpoints
@usage_router.get("", response_model=UsageStatusResponse)
def get_usage(client_ip: ClientIP, usage_service: UsageServiceDep) -> UsageStatusResponse:
    """Remaining generations for the caller today."""
    status = usage_service.check(client_ip)
    return UsageStatusResponse.model_validate(status.to_dict())


@usage_router.post("/consume", response_model=ConsumeResponse)
def consume_usage(client_ip: ClientIP, usage_service: UsageServiceDep) -> ConsumeResponse:
    result = usage_service.consume(client_ip)
    return ConsumeResponse.model_validate(result.to_dict())


@usage_router.post("/claim-bonus", response_model=BonusClaimResponse)
def claim_bonus(client_ip: ClientIP, usage_service: UsageServiceDep) -> BonusClaimResponse:
    """Claim the once-a-day share bonus."""
    result = usage_service.claim_bonus(client_ip)
    return BonusClaimResponse.model_validate(result.to_dict())


# Palette endpoints
@palette_router.post("/generate", response_model=GenerateResponse)
def generate_palette(
    payload: GenerateRequest,
    client_ip: ClientIP,
    usage_service: UsageServiceDep,
    captcha_verifier: CaptchaVerifierDep,
    generator: GeneratorDep,
) -> GenerateResponse:
    """Generate a palette from an image.

    The CAPTCHA is checked first, then the caller's quota. One generation
    is consumed only after the model returned a usable palette.
    """
    remote_ip = None if client_ip == UNKNOWN_CLIENT else client_ip
    captcha_verifier.require_valid(payload.turnstile_token, remote_ip)

    status = usage_service.check(client_ip)
    if status.remaining <= 0:
        raise QuotaExceededError(status.reset_at, status.can_use_bonus)

    result = generator.generate(payload.image_base64, payload.mime_type)
    usage_service.consume(client_ip)
    status = usage_service.check(client_ip)

    logger.info(
        "palette_generated",
        client_ip=client_ip,
        mood=result.mood,
        remaining=status.remaining,
    )
    return GenerateResponse(
        colors=[ColorTokenResponse.model_validate(t.to_dict()) for t in result.colors],
        mood=result.mood,
        usage=UsageStatusResponse.model_validate(status.to_dict()),
    )


@palette_router.post("/export", response_model=ExportResponse)
def export_palette(
    payload: ExportRequest, palette_service: PaletteServiceDep
) -> ExportResponse:
    """Render a palette as Tailwind v4, CSS variables or JSON."""
    palette = build_palette(palette_service, payload.colors)
    code = palette_service.export(palette, payload.format)
    return ExportResponse(format=payload.format, code=code)


@palette_router.post("/contrast", response_model=ContrastReportResponse)
def palette_contrast(
    payload: ContrastRequest, palette_service: PaletteServiceDep
) -> ContrastReportResponse:
    palette = build_palette(palette_service, payload.colors)
    reports = palette_service.contrast_report(palette, payload.baseline)
    return ContrastReportResponse(
        baseline=payload.baseline,
        results=[ContrastEntryResponse.model_validate(r.to_dict()) for r in reports],
    )


@palette_router.post("/preview", response_model=PreviewResponse)
def preview_palette(
    payload: PreviewRequest, palette_service: PaletteServiceDep
) -> PreviewResponse:
    """CSS variables for rendering the palette in a light or dark preview."""
    palette = build_palette(palette_service, payload.colors)
    theme = palette_service.preview_theme(palette, payload.mode)
    return PreviewResponse(
        mode=theme.mode,
        variables=theme.variables(),
        css=generate_css_root(theme),
    )


# Single color endpoints
@color_router.get("/contrast", response_model=ContrastPairResponse)
def color_contrast(
    foreground: Annotated[str, Query()],
    background: Annotated[str, Query()],
) -> ContrastPairResponse:
    fg = parse_hex(foreground)
    bg = parse_hex(background)
    ratio = get_contrast_ratio(fg, bg)
    return ContrastPairResponse(
        foreground=fg,
        background=bg,
        ratio=round(ratio, 2),
        rating=ContrastRatingResponse.model_validate(get_wcag_rating(ratio).to_dict()),
    )


@color_router.get("/{hex_color}/shades", response_model=ShadesResponse)
def color_shades(hex_color: str) -> ShadesResponse:
    """50-950 shade ramp for one color."""
    base = parse_hex(hex_color)
    return ShadesResponse(hex=base, shades=generate_shades(base))


@color_router.get("/{hex_color}/dark-variant", response_model=DarkVariantResponse)
def color_dark_variant(
    hex_color: str, role: Annotated[str | None, Query()] = None
) -> DarkVariantResponse:
    base = parse_hex(hex_color)
    return DarkVariantResponse(
        hex=base,
        role=role,
        category=classify_role(role).value,
        dark_hex=calculate_dark_variant(base, role),
    )

from __future__ import annotations

from datetime import date, timedelta
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


SectionKind = Literal[
    "logo",
    "hero",
    "heroBg",
    "heroVideo",
    "heroImage",
    "heroForm",
    "footer",
    "spacer",
    "divider",
    "headline",
    "body",
    "quote",
    "video",
    "image",
    "gallery",
    "banner",
    "testimonials",
    "logoCloud",
    "socialProof",
    "stats",
    "features",
    "steps",
    "benefits",
    "comparison",
    "cards",
    "cta",
    "form",
    "newsletter",
    "document",
    "countdown",
    "pricing",
    "faq",
    "team",
    "qrCode",
]

_BRAND_PURPLE = "#6d54df"
_INK = "#1a1a1a"
_NAVY = "#0f172a"
_SLATE_50 = "#f8fafc"


class SectionStyle(BaseModel):
    """Presentation attributes shared by every section kind. All optional."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    backgroundColor: Optional[str] = None
    textColor: Optional[str] = None
    fontSize: Optional[str] = None
    fontWeight: Optional[str] = None
    fontStyle: Optional[str] = None
    textAlign: Optional[str] = None
    paddingY: Optional[str] = None
    paddingX: Optional[str] = None
    maxWidth: Optional[str] = None
    borderRadius: Optional[str] = None
    overlayColor: Optional[str] = None
    overlayOpacity: Optional[float] = None
    buttonColor: Optional[str] = None
    buttonTextColor: Optional[str] = None
    secondaryButtonColor: Optional[str] = None
    secondaryButtonTextColor: Optional[str] = None
    height: Optional[str] = None
    accentColor: Optional[str] = None
    borderColor: Optional[str] = None
    columns: Optional[int] = None


# -- repeated item payloads ---------------------------------------------------


class _Item(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FeatureItem(_Item):
    icon: str = ""
    title: str = ""
    description: str = ""


class TestimonialItem(_Item):
    quote: str = ""
    author: str = ""
    role: str = ""
    avatar: Optional[str] = None


class PricingTier(_Item):
    name: str = ""
    price: str = ""
    period: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    highlighted: Optional[bool] = None
    buttonText: Optional[str] = None


class FaqItem(_Item):
    question: str = ""
    answer: str = ""


class StatItem(_Item):
    value: str = ""
    label: str = ""


class TeamMember(_Item):
    name: str = ""
    role: str = ""
    imageUrl: Optional[str] = None


class ComparisonRow(_Item):
    feature: str = ""
    optionA: str = ""
    optionB: str = ""


class StepItem(_Item):
    title: str = ""
    description: str = ""


class FooterLink(_Item):
    label: str = ""
    url: str = ""


class FooterColumn(_Item):
    title: str = ""
    links: list[FooterLink] = Field(default_factory=list)


class SocialProofItem(_Item):
    platform: str = ""
    count: str = ""
    label: str = ""


class CardItem(_Item):
    title: str = ""
    description: str = ""
    imageUrl: Optional[str] = None


# -- per-kind content ---------------------------------------------------------
# Field defaults are the registered default instance of each kind.


class SectionContent(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class LogoContent(SectionContent):
    logoUrl: str = ""


class HeroContent(SectionContent):
    text: str = "Build Something Amazing"
    heroSubheadline: str = "The all-in-one platform to launch your next big idea."
    heroBadge: str = "New"
    heroImageUrl: str = ""
    buttonText: str = "Get Started"
    buttonLink: str = "#"
    secondaryButtonText: str = "Learn More"
    secondaryButtonLink: str = "#"
    hideButton: bool = False
    hideSecondaryButton: bool = False


class HeroBgContent(SectionContent):
    text: str = "Build Something Amazing"
    heroSubheadline: str = "The all-in-one platform to launch your next big idea."
    heroBadge: str = "New"
    imageUrl: str = ""
    buttonText: str = "Get Started"
    buttonLink: str = "#"
    secondaryButtonText: str = "Learn More"
    secondaryButtonLink: str = "#"
    hideButton: bool = False
    hideSecondaryButton: bool = False


class HeroVideoContent(SectionContent):
    text: str = "Your Headline Here"
    heroSubheadline: str = "A compelling subheadline that explains your value proposition."
    videoUrl: str = ""


class HeroImageContent(SectionContent):
    text: str = "Your Headline Here"
    heroSubheadline: str = "A compelling subheadline that explains your value proposition."
    heroImageUrl: str = ""


class HeroFormContent(SectionContent):
    text: str = "Your Headline Here"
    heroSubheadline: str = "A compelling subheadline that explains your value proposition."
    heroFormTitle: str = "Get Started Free"
    heroFormFields: list[str] = Field(default_factory=lambda: ["First Name", "Email", "Company"])
    heroFormButtonText: str = "Get Started"
    formRecipientEmail: str = ""


class FooterContent(SectionContent):
    footerColumns: list[FooterColumn] = Field(
        default_factory=lambda: [
            FooterColumn(
                title="Product",
                links=[FooterLink(label="Features", url="#"), FooterLink(label="Pricing", url="#")],
            ),
            FooterColumn(
                title="Company",
                links=[FooterLink(label="About", url="#"), FooterLink(label="Blog", url="#")],
            ),
        ]
    )
    footerCopyright: str = "© 2025 Company. All rights reserved."


class SpacerContent(SectionContent):
    pass


class DividerContent(SectionContent):
    dividerStyle: Literal["solid", "dashed", "dotted", "gradient"] = "solid"


class HeadlineContent(SectionContent):
    text: str = "Your Headline Here"


class BodyContent(SectionContent):
    text: str = (
        "Add your body text here. You can describe your product, service, or any other "
        "content you want to share with your audience."
    )


class QuoteContent(SectionContent):
    quoteText: str = "The best way to predict the future is to create it."
    quoteAuthor: str = "Peter Drucker"
    quoteRole: str = "Management Consultant"


class VideoContent(SectionContent):
    videoUrl: str = ""


class ImageContent(SectionContent):
    imageUrl: str = ""
    imageUrls: list[str] = Field(default_factory=list)
    imageLayout: Literal["single", "row"] = "single"


class GalleryContent(SectionContent):
    galleryUrls: list[str] = Field(default_factory=list)
    galleryColumns: int = 3


class BannerContent(SectionContent):
    bannerText: str = "Banner Headline"
    bannerSubtext: str = "Supporting text for your banner"
    imageUrl: str = ""


class TestimonialsContent(SectionContent):
    testimonialItems: list[TestimonialItem] = Field(
        default_factory=lambda: [
            TestimonialItem(
                quote="This product changed how we work. Highly recommended!",
                author="Jane Smith",
                role="CEO, Acme Inc.",
            ),
            TestimonialItem(
                quote="Incredible results from day one. Our team loves it.",
                author="John Doe",
                role="CTO, Startup Co.",
            ),
            TestimonialItem(
                quote="Simple, powerful, and easy to use. 10/10.",
                author="Sarah Lee",
                role="Director, Agency X",
            ),
        ]
    )


class LogoCloudContent(SectionContent):
    logoCloudTitle: str = "Trusted by leading companies"
    logoUrls: list[str] = Field(default_factory=list)


class SocialProofContent(SectionContent):
    socialProofTitle: str = "Trusted worldwide"
    socialProofItems: list[SocialProofItem] = Field(
        default_factory=lambda: [
            SocialProofItem(platform="Users", count="10,000+", label="Active users"),
            SocialProofItem(platform="Reviews", count="4.9/5", label="Average rating"),
            SocialProofItem(platform="Countries", count="50+", label="Countries served"),
        ]
    )


class StatsContent(SectionContent):
    statItems: list[StatItem] = Field(
        default_factory=lambda: [
            StatItem(value="99%", label="Uptime"),
            StatItem(value="50K+", label="Customers"),
            StatItem(value="200M+", label="Requests/day"),
            StatItem(value="24/7", label="Support"),
        ]
    )


class FeaturesContent(SectionContent):
    featureItems: list[FeatureItem] = Field(
        default_factory=lambda: [
            FeatureItem(icon="⚡", title="Lightning Fast", description="Built for speed from the ground up."),
            FeatureItem(icon="🔒", title="Secure by Default", description="Enterprise-grade security baked in."),
            FeatureItem(icon="🎨", title="Beautiful Design", description="Pixel-perfect UI components."),
            FeatureItem(icon="📱", title="Fully Responsive", description="Looks great on every device."),
            FeatureItem(icon="🔗", title="Easy Integrations", description="Connect your favorite tools."),
            FeatureItem(icon="📊", title="Analytics Built-in", description="Track everything that matters."),
        ]
    )


class StepsContent(SectionContent):
    stepsTitle: str = "How It Works"
    stepsSubtitle: str = "Get started in three simple steps"
    stepItems: list[StepItem] = Field(
        default_factory=lambda: [
            StepItem(title="Sign Up", description="Create your account in less than 60 seconds."),
            StepItem(title="Configure", description="Set up your workspace and invite your team."),
            StepItem(title="Launch", description="Go live and start seeing results immediately."),
        ]
    )


class BenefitsContent(SectionContent):
    benefitsTitle: str = "Why Choose Us"
    benefitsSubtitle: str = "Everything you need to succeed"
    benefitItems: list[str] = Field(
        default_factory=lambda: [
            "No credit card required",
            "Free 14-day trial",
            "Cancel anytime",
            "24/7 customer support",
            "Unlimited projects",
            "99.9% uptime guarantee",
        ]
    )


class ComparisonContent(SectionContent):
    comparisonHeaderA: str = "Us"
    comparisonHeaderB: str = "Others"
    comparisonRows: list[ComparisonRow] = Field(
        default_factory=lambda: [
            ComparisonRow(feature="Pricing", optionA="Affordable", optionB="Expensive"),
            ComparisonRow(feature="Support", optionA="24/7", optionB="Business hours"),
            ComparisonRow(feature="Setup Time", optionA="Minutes", optionB="Days"),
        ]
    )


class CardsContent(SectionContent):
    cardsTitle: str = "Our Services"
    cardItems: list[CardItem] = Field(
        default_factory=lambda: [
            CardItem(title="Consulting", description="Expert advice for your business growth.", imageUrl=""),
            CardItem(title="Development", description="Custom solutions built to scale.", imageUrl=""),
            CardItem(title="Design", description="Beautiful interfaces your users will love.", imageUrl=""),
        ]
    )


class CtaContent(SectionContent):
    text: str = "Ready to get started?"
    buttonText: str = "Get Started"
    buttonLink: str = "#"
    secondaryButtonText: str = ""
    secondaryButtonLink: str = ""


class FormContent(SectionContent):
    formTitle: str = "Get in Touch"
    formSubtitle: str = "Fill out the form below and we'll get back to you."
    formFields: list[str] = Field(default_factory=lambda: ["First Name", "Email", "Message"])
    formButtonText: str = "Submit"
    formRecipientEmail: str = ""


class NewsletterContent(SectionContent):
    newsletterTitle: str = "Stay in the loop"
    newsletterSubtitle: str = "Get the latest updates delivered to your inbox."
    newsletterButtonText: str = "Subscribe"
    newsletterPlaceholder: str = "Enter your email"


class DocumentContent(SectionContent):
    documentUrl: str = ""
    documentTitle: str = "Download Our Guide"
    documentDescription: str = "Get the full PDF with all the details."
    documentButtonText: str = "Download PDF"


def _one_week_from_today() -> str:
    return (date.today() + timedelta(days=7)).isoformat()


class CountdownContent(SectionContent):
    countdownDate: str = Field(default_factory=_one_week_from_today)
    countdownTitle: str = "Launch Day Is Coming"
    countdownSubtitle: str = "Don't miss out on our exclusive launch offer."


class PricingContent(SectionContent):
    pricingTitle: str = "Simple Pricing"
    pricingSubtitle: str = "No hidden fees. Cancel anytime."
    pricingItems: list[PricingTier] = Field(
        default_factory=lambda: [
            PricingTier(
                name="Starter",
                price="$9",
                period="/mo",
                features=["5 projects", "1 user", "Basic support"],
                buttonText="Start Free",
            ),
            PricingTier(
                name="Pro",
                price="$29",
                period="/mo",
                features=["Unlimited projects", "10 users", "Priority support", "Analytics"],
                highlighted=True,
                buttonText="Get Pro",
            ),
            PricingTier(
                name="Enterprise",
                price="$99",
                period="/mo",
                features=[
                    "Everything in Pro",
                    "Unlimited users",
                    "Dedicated support",
                    "Custom integrations",
                    "SLA",
                ],
                buttonText="Contact Us",
            ),
        ]
    )


class FaqContent(SectionContent):
    faqItems: list[FaqItem] = Field(
        default_factory=lambda: [
            FaqItem(
                question="How do I get started?",
                answer="Sign up for a free account and follow our quick setup guide.",
            ),
            FaqItem(
                question="Can I cancel anytime?",
                answer="Yes, you can cancel your subscription at any time with no penalties.",
            ),
            FaqItem(
                question="Do you offer support?",
                answer="We offer 24/7 support via email and live chat.",
            ),
        ]
    )


class TeamContent(SectionContent):
    teamTitle: str = "Meet the Team"
    teamSubtitle: str = "The people behind the product"
    teamMembers: list[TeamMember] = Field(
        default_factory=lambda: [
            TeamMember(name="Alex Johnson", role="CEO & Founder", imageUrl=""),
            TeamMember(name="Maria Garcia", role="CTO", imageUrl=""),
            TeamMember(name="Sam Williams", role="Head of Design", imageUrl=""),
        ]
    )


class QrCodeContent(SectionContent):
    qrCodeUrl: str = "https://example.com"
    qrCodeSize: int = 200
    qrCodeLabel: str = "Scan to visit"


# -- default styles -----------------------------------------------------------

_HERO_STYLE: dict[str, Any] = {
    "backgroundColor": _NAVY,
    "textColor": "#ffffff",
    "paddingY": "96px",
    "textAlign": "center",
    "fontSize": "56px",
    "fontWeight": "bold",
    "buttonColor": _BRAND_PURPLE,
    "buttonTextColor": "#ffffff",
    "secondaryButtonColor": "transparent",
    "secondaryButtonTextColor": "#ffffff",
}
_SPLIT_HERO_STYLE: dict[str, Any] = {
    "backgroundColor": _NAVY,
    "textColor": "#ffffff",
    "paddingY": "80px",
    "fontSize": "44px",
    "fontWeight": "bold",
    "textAlign": "left",
}

DEFAULT_STYLES: dict[str, dict[str, Any]] = {
    "logo": {"backgroundColor": "#ffffff", "paddingY": "24px", "height": "60px"},
    "hero": dict(_HERO_STYLE),
    "heroBg": {**_HERO_STYLE, "overlayColor": _BRAND_PURPLE, "overlayOpacity": 0.6},
    "heroVideo": dict(_SPLIT_HERO_STYLE),
    "heroImage": dict(_SPLIT_HERO_STYLE),
    "heroForm": {**_SPLIT_HERO_STYLE, "buttonColor": _BRAND_PURPLE, "buttonTextColor": "#ffffff"},
    "footer": {"backgroundColor": _NAVY, "textColor": "#94a3b8", "paddingY": "48px"},
    "spacer": {"backgroundColor": "#ffffff", "height": "48px"},
    "divider": {"backgroundColor": "#ffffff", "paddingY": "24px", "accentColor": "#e2e8f0"},
    "headline": {
        "fontSize": "48px",
        "fontWeight": "bold",
        "textAlign": "center",
        "textColor": _INK,
        "backgroundColor": "#ffffff",
        "paddingY": "48px",
    },
    "body": {
        "fontSize": "18px",
        "fontWeight": "normal",
        "textAlign": "left",
        "textColor": "#4a4a4a",
        "backgroundColor": "#ffffff",
        "paddingY": "32px",
        "maxWidth": "800px",
    },
    "quote": {
        "backgroundColor": _SLATE_50,
        "textColor": _INK,
        "paddingY": "48px",
        "maxWidth": "800px",
        "accentColor": _BRAND_PURPLE,
        "fontSize": "24px",
    },
    "video": {"backgroundColor": "#000000", "paddingY": "48px", "maxWidth": "900px"},
    "image": {"backgroundColor": "#ffffff", "paddingY": "32px", "maxWidth": "900px", "borderRadius": "8px"},
    "gallery": {"backgroundColor": "#ffffff", "paddingY": "48px", "maxWidth": "1100px", "borderRadius": "8px"},
    "banner": {
        "backgroundColor": _BRAND_PURPLE,
        "textColor": "#ffffff",
        "paddingY": "80px",
        "overlayColor": "#000000",
        "overlayOpacity": 0.4,
        "fontSize": "40px",
        "fontWeight": "bold",
        "textAlign": "center",
    },
    "testimonials": {"backgroundColor": _SLATE_50, "textColor": _INK, "paddingY": "64px", "maxWidth": "1100px"},
    "logoCloud": {"backgroundColor": "#ffffff", "textColor": "#94a3b8", "paddingY": "48px"},
    "socialProof": {
        "backgroundColor": _SLATE_50,
        "textColor": _INK,
        "paddingY": "48px",
        "accentColor": _BRAND_PURPLE,
    },
    "stats": {"backgroundColor": _NAVY, "textColor": "#ffffff", "paddingY": "48px", "accentColor": _BRAND_PURPLE},
    "features": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "1100px",
        "columns": 3,
    },
    "steps": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "900px",
        "accentColor": _BRAND_PURPLE,
    },
    "benefits": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "700px",
        "accentColor": "#22c55e",
    },
    "comparison": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "48px",
        "maxWidth": "800px",
        "accentColor": _BRAND_PURPLE,
    },
    "cards": {
        "backgroundColor": _SLATE_50,
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "1100px",
        "columns": 3,
    },
    "cta": {
        "backgroundColor": "#f8f8f8",
        "textColor": _INK,
        "paddingY": "64px",
        "textAlign": "center",
        "fontSize": "32px",
        "fontWeight": "bold",
        "buttonColor": _BRAND_PURPLE,
        "buttonTextColor": "#ffffff",
        "secondaryButtonColor": "transparent",
        "secondaryButtonTextColor": _BRAND_PURPLE,
    },
    "form": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "48px",
        "maxWidth": "600px",
        "buttonColor": _BRAND_PURPLE,
        "buttonTextColor": "#ffffff",
    },
    "newsletter": {
        "backgroundColor": _NAVY,
        "textColor": "#ffffff",
        "paddingY": "64px",
        "maxWidth": "600px",
        "buttonColor": _BRAND_PURPLE,
        "buttonTextColor": "#ffffff",
    },
    "document": {
        "backgroundColor": "#f8f8f8",
        "textColor": _INK,
        "paddingY": "48px",
        "maxWidth": "700px",
        "buttonColor": _BRAND_PURPLE,
        "buttonTextColor": "#ffffff",
    },
    "countdown": {"backgroundColor": _NAVY, "textColor": "#ffffff", "paddingY": "64px", "accentColor": _BRAND_PURPLE},
    "pricing": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "1100px",
        "buttonColor": _BRAND_PURPLE,
        "buttonTextColor": "#ffffff",
        "accentColor": _BRAND_PURPLE,
    },
    "faq": {
        "backgroundColor": "#ffffff",
        "textColor": _INK,
        "paddingY": "64px",
        "maxWidth": "800px",
        "accentColor": _BRAND_PURPLE,
    },
    "team": {"backgroundColor": "#ffffff", "textColor": _INK, "paddingY": "64px", "maxWidth": "1000px"},
    "qrCode": {"backgroundColor": "#ffffff", "textColor": _INK, "paddingY": "48px", "textAlign": "center"},
}


# -- sections (tagged union on `type`) ----------------------------------------


class SectionBase(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: str = Field(min_length=1)
    style: SectionStyle = Field(default_factory=SectionStyle)

    @model_validator(mode="before")
    @classmethod
    def _fill_style_defaults(cls, data: Any) -> Any:
        # Keys absent from the incoming style fall back to the kind's default style.
        if not isinstance(data, dict):
            return data
        defaults = DEFAULT_STYLES.get(data.get("type") or _model_kind(cls))
        style = data.get("style")
        if defaults is None or not (style is None or isinstance(style, dict)):
            return data
        return {**data, "style": {**defaults, **(style or {})}}


def _model_kind(model: type[BaseModel]) -> str | None:
    field = model.model_fields.get("type")
    return field.default if field is not None else None


class LogoSection(SectionBase):
    type: Literal["logo"] = "logo"
    content: LogoContent = Field(default_factory=LogoContent)


class HeroSection(SectionBase):
    type: Literal["hero"] = "hero"
    content: HeroContent = Field(default_factory=HeroContent)


class HeroBgSection(SectionBase):
    type: Literal["heroBg"] = "heroBg"
    content: HeroBgContent = Field(default_factory=HeroBgContent)


class HeroVideoSection(SectionBase):
    type: Literal["heroVideo"] = "heroVideo"
    content: HeroVideoContent = Field(default_factory=HeroVideoContent)


class HeroImageSection(SectionBase):
    type: Literal["heroImage"] = "heroImage"
    content: HeroImageContent = Field(default_factory=HeroImageContent)


class HeroFormSection(SectionBase):
    type: Literal["heroForm"] = "heroForm"
    content: HeroFormContent = Field(default_factory=HeroFormContent)


class FooterSection(SectionBase):
    type: Literal["footer"] = "footer"
    content: FooterContent = Field(default_factory=FooterContent)


class SpacerSection(SectionBase):
    type: Literal["spacer"] = "spacer"
    content: SpacerContent = Field(default_factory=SpacerContent)


class DividerSection(SectionBase):
    type: Literal["divider"] = "divider"
    content: DividerContent = Field(default_factory=DividerContent)


class HeadlineSection(SectionBase):
    type: Literal["headline"] = "headline"
    content: HeadlineContent = Field(default_factory=HeadlineContent)


class BodySection(SectionBase):
    type: Literal["body"] = "body"
    content: BodyContent = Field(default_factory=BodyContent)


class QuoteSection(SectionBase):
    type: Literal["quote"] = "quote"
    content: QuoteContent = Field(default_factory=QuoteContent)


class VideoSection(SectionBase):
    type: Literal["video"] = "video"
    content: VideoContent = Field(default_factory=VideoContent)


class ImageSection(SectionBase):
    type: Literal["image"] = "image"
    content: ImageContent = Field(default_factory=ImageContent)


class GallerySection(SectionBase):
    type: Literal["gallery"] = "gallery"
    content: GalleryContent = Field(default_factory=GalleryContent)


class BannerSection(SectionBase):
    type: Literal["banner"] = "banner"
    content: BannerContent = Field(default_factory=BannerContent)


class TestimonialsSection(SectionBase):
    type: Literal["testimonials"] = "testimonials"
    content: TestimonialsContent = Field(default_factory=TestimonialsContent)


class LogoCloudSection(SectionBase):
    type: Literal["logoCloud"] = "logoCloud"
    content: LogoCloudContent = Field(default_factory=LogoCloudContent)


class SocialProofSection(SectionBase):
    type: Literal["socialProof"] = "socialProof"
    content: SocialProofContent = Field(default_factory=SocialProofContent)


class StatsSection(SectionBase):
    type: Literal["stats"] = "stats"
    content: StatsContent = Field(default_factory=StatsContent)


class FeaturesSection(SectionBase):
    type: Literal["features"] = "features"
    content: FeaturesContent = Field(default_factory=FeaturesContent)


class StepsSection(SectionBase):
    type: Literal["steps"] = "steps"
    content: StepsContent = Field(default_factory=StepsContent)


class BenefitsSection(SectionBase):
    type: Literal["benefits"] = "benefits"
    content: BenefitsContent = Field(default_factory=BenefitsContent)


class ComparisonSection(SectionBase):
    type: Literal["comparison"] = "comparison"
    content: ComparisonContent = Field(default_factory=ComparisonContent)


class CardsSection(SectionBase):
    type: Literal["cards"] = "cards"
    content: CardsContent = Field(default_factory=CardsContent)


class CtaSection(SectionBase):
    type: Literal["cta"] = "cta"
    content: CtaContent = Field(default_factory=CtaContent)


class FormSection(SectionBase):
    type: Literal["form"] = "form"
    content: FormContent = Field(default_factory=FormContent)


class NewsletterSection(SectionBase):
    type: Literal["newsletter"] = "newsletter"
    content: NewsletterContent = Field(default_factory=NewsletterContent)


class DocumentSection(SectionBase):
    type: Literal["document"] = "document"
    content: DocumentContent = Field(default_factory=DocumentContent)


class CountdownSection(SectionBase):
    type: Literal["countdown"] = "countdown"
    content: CountdownContent = Field(default_factory=CountdownContent)


class PricingSection(SectionBase):
    type: Literal["pricing"] = "pricing"
    content: PricingContent = Field(default_factory=PricingContent)


class FaqSection(SectionBase):
    type: Literal["faq"] = "faq"
    content: FaqContent = Field(default_factory=FaqContent)


class TeamSection(SectionBase):
    type: Literal["team"] = "team"
    content: TeamContent = Field(default_factory=TeamContent)


class QrCodeSection(SectionBase):
    type: Literal["qrCode"] = "qrCode"
    content: QrCodeContent = Field(default_factory=QrCodeContent)


Section = Annotated[
    Union[
        LogoSection,
        HeroSection,
        HeroBgSection,
        HeroVideoSection,
        HeroImageSection,
        HeroFormSection,
        FooterSection,
        SpacerSection,
        DividerSection,
        HeadlineSection,
        BodySection,
        QuoteSection,
        VideoSection,
        ImageSection,
        GallerySection,
        BannerSection,
        TestimonialsSection,
        LogoCloudSection,
        SocialProofSection,
        StatsSection,
        FeaturesSection,
        StepsSection,
        BenefitsSection,
        ComparisonSection,
        CardsSection,
        CtaSection,
        FormSection,
        NewsletterSection,
        DocumentSection,
        CountdownSection,
        PricingSection,
        FaqSection,
        TeamSection,
        QrCodeSection,
    ],
    Field(discriminator="type"),
]

SectionAdapter: TypeAdapter[Section] = TypeAdapter(Section)

"""
Auth0 Management API Client

Auth0 Management API v2 的类型化 Python 客户端：
Guardian (MFA)、Prompt、Self-Service Profile、Tenant。
"""

from .optional import UNSET, Unset, wrap, unwrap, is_set

from .models import (
    Entity,
    EntityList,
    ListMetadata,
    ManagementError,
    ModelValidationError,
    # Guardian
    MultiFactor,
    MultiFactorPolicies,
    MultiFactorProvider,
    PhoneMessageTypes,
    MultiFactorSMSTemplate,
    MultiFactorPhoneTemplate,
    MultiFactorProviderTwilio,
    MultiFactorProviderAmazonSNS,
    MultiFactorProviderAPNS,
    MultiFactorProviderFCM,
    MultiFactorDUOSettings,
    MultiFactorWebAuthnSettings,
    CreateEnrollmentTicket,
    EnrollmentTicket,
    Enrollment,
    # Prompt
    Prompt,
    # Self-Service Profile
    SelfServiceProfile,
    SelfServiceProfileUserAttribute,
    SelfServiceProfileBranding,
    BrandingColors,
    SelfServiceProfileTicket,
    SelfServiceProfileTicketConnectionConfig,
    SelfServiceProfileTicketConnectionConfigOptions,
    SelfServiceProfileTicketEnabledOrganization,
    # Tenant
    Tenant,
    TenantFlags,
    TenantSessionCookie,
)

from .options import Option, RequestOption
from .client import (
    ManagementClient,
    ManagementClientError,
    APIError,
    TransportError,
    RequestTimeoutError,
    DecodeError,
)
from .config import ClientConfig, ConfigError, load_config

__all__ = [
    # Client
    "ManagementClient",
    "ManagementClientError",
    "APIError",
    "TransportError",
    "RequestTimeoutError",
    "DecodeError",
    # Config
    "ClientConfig",
    "ConfigError",
    "load_config",
    # Optional
    "UNSET",
    "Unset",
    "wrap",
    "unwrap",
    "is_set",
    # Options
    "Option",
    "RequestOption",
    # Models
    "Entity",
    "EntityList",
    "ListMetadata",
    "ManagementError",
    "ModelValidationError",
    "MultiFactor",
    "MultiFactorPolicies",
    "MultiFactorProvider",
    "PhoneMessageTypes",
    "MultiFactorSMSTemplate",
    "MultiFactorPhoneTemplate",
    "MultiFactorProviderTwilio",
    "MultiFactorProviderAmazonSNS",
    "MultiFactorProviderAPNS",
    "MultiFactorProviderFCM",
    "MultiFactorDUOSettings",
    "MultiFactorWebAuthnSettings",
    "CreateEnrollmentTicket",
    "EnrollmentTicket",
    "Enrollment",
    "Prompt",
    "SelfServiceProfile",
    "SelfServiceProfileUserAttribute",
    "SelfServiceProfileBranding",
    "BrandingColors",
    "SelfServiceProfileTicket",
    "SelfServiceProfileTicketConnectionConfig",
    "SelfServiceProfileTicketConnectionConfigOptions",
    "SelfServiceProfileTicketEnabledOrganization",
    "Tenant",
    "TenantFlags",
    "TenantSessionCookie",
]

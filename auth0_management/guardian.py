"""
Guardian (多因素认证)

路径:
- guardian/factors                         列出因子
- guardian/factors/{factor}                开启 / 关闭 (PUT {"enabled": ...})
- guardian/factors/{factor}/...            因子的服务商、模板、设置
- guardian/policies                        MFA 策略
- guardian/enrollments/ticket              创建注册 ticket
- guardian/enrollments/{id}                注册记录
"""

from typing import TYPE_CHECKING, Any, ClassVar

from .models import (
    CreateEnrollmentTicket,
    E,
    Enrollment,
    EnrollmentTicket,
    ModelValidationError,
    MultiFactor,
    MultiFactorDUOSettings,
    MultiFactorPhoneTemplate,
    MultiFactorPolicies,
    MultiFactorProvider,
    MultiFactorProviderAmazonSNS,
    MultiFactorProviderAPNS,
    MultiFactorProviderFCM,
    MultiFactorProviderTwilio,
    MultiFactorSMSTemplate,
    MultiFactorWebAuthnSettings,
    PhoneMessageTypes,
)
from .options import RequestOption

if TYPE_CHECKING:
    from .client import ManagementClient


def _parse_factors(data: Any) -> list[MultiFactor]:
    if not isinstance(data, list):
        raise ModelValidationError(f"guardian/factors 需要数组，实际为 {type(data).__name__}")
    return [MultiFactor.from_dict(d) for d in data]


def _parse_policies(data: Any) -> MultiFactorPolicies:
    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        raise ModelValidationError(f"guardian/policies 需要字符串数组: {data!r}")
    return list(data)


class GuardianManager:
    """Guardian 入口: multi_factor / enrollment"""

    def __init__(self, client: "ManagementClient"):
        self.multi_factor = MultiFactorManager(client)
        self.enrollment = EnrollmentManager(client)


# ============ 因子 ============

class FactorManager:
    """
    单个 MFA 因子

    子类设置 factor (路径段)，并按需提供服务商 / 模板 / 设置的读写方法
    """

    factor: ClassVar[str] = ""

    def __init__(self, client: "ManagementClient"):
        self.client = client

    def _uri(self, *segments: str) -> str:
        return self.client.uri("guardian", "factors", self.factor, *segments)

    def _read(self, entity: type[E], *segments: str, opts: tuple[RequestOption, ...] = ()) -> E:
        return self.client.request("GET", self._uri(*segments), target=entity, options=opts)

    def _write(
        self, method: str, entity: E, *segments: str, opts: tuple[RequestOption, ...] = ()
    ) -> E:
        return self.client.request(
            method, self._uri(*segments), body=entity, target=entity, options=opts
        )

    def enable(self, enabled: bool, *opts: RequestOption) -> None:
        """开启或关闭该因子 (False 会显式发送)"""
        self.client.request("PUT", self._uri(), body={"enabled": enabled}, options=opts)


class MultiFactorPhone(FactorManager):
    """电话因子 (短信 / 语音)"""

    factor = "phone"

    def provider(self, *opts: RequestOption) -> MultiFactorProvider:
        """当前服务商: auth0 / twilio / phone-message-hook"""
        return self._read(MultiFactorProvider, "selected-provider", opts=opts)

    def update_provider(self, p: MultiFactorProvider, *opts: RequestOption) -> MultiFactorProvider:
        return self._write("PUT", p, "selected-provider", opts=opts)

    def message_types(self, *opts: RequestOption) -> PhoneMessageTypes:
        return self._read(PhoneMessageTypes, "message-types", opts=opts)

    def update_message_types(self, mt: PhoneMessageTypes, *opts: RequestOption) -> PhoneMessageTypes:
        return self._write("PUT", mt, "message-types", opts=opts)

    def twilio(self, *opts: RequestOption) -> MultiFactorProviderTwilio:
        return self._read(MultiFactorProviderTwilio, "providers", "twilio", opts=opts)

    def update_twilio(
        self, t: MultiFactorProviderTwilio, *opts: RequestOption
    ) -> MultiFactorProviderTwilio:
        return self._write("PUT", t, "providers", "twilio", opts=opts)

    def template(self, *opts: RequestOption) -> MultiFactorPhoneTemplate:
        return self._read(MultiFactorPhoneTemplate, "templates", opts=opts)

    def update_template(
        self, t: MultiFactorPhoneTemplate, *opts: RequestOption
    ) -> MultiFactorPhoneTemplate:
        return self._write("PUT", t, "templates", opts=opts)


class MultiFactorSMS(FactorManager):
    """短信因子 (旧接口，新租户使用 phone)"""

    factor = "sms"

    def template(self, *opts: RequestOption) -> MultiFactorSMSTemplate:
        return self._read(MultiFactorSMSTemplate, "templates", opts=opts)

    def update_template(self, t: MultiFactorSMSTemplate, *opts: RequestOption) -> MultiFactorSMSTemplate:
        return self._write("PUT", t, "templates", opts=opts)

    def twilio(self, *opts: RequestOption) -> MultiFactorProviderTwilio:
        return self._read(MultiFactorProviderTwilio, "providers", "twilio", opts=opts)

    def update_twilio(
        self, t: MultiFactorProviderTwilio, *opts: RequestOption
    ) -> MultiFactorProviderTwilio:
        return self._write("PUT", t, "providers", "twilio", opts=opts)


class MultiFactorPush(FactorManager):
    """推送通知因子 (Guardian app)"""

    factor = "push-notification"

    def provider(self, *opts: RequestOption) -> MultiFactorProvider:
        """当前服务商: guardian / sns / direct"""
        return self._read(MultiFactorProvider, "selected-provider", opts=opts)

    def update_provider(self, p: MultiFactorProvider, *opts: RequestOption) -> MultiFactorProvider:
        return self._write("PUT", p, "selected-provider", opts=opts)

    def amazon_sns(self, *opts: RequestOption) -> MultiFactorProviderAmazonSNS:
        return self._read(MultiFactorProviderAmazonSNS, "providers", "sns", opts=opts)

    def update_amazon_sns(
        self, sns: MultiFactorProviderAmazonSNS, *opts: RequestOption
    ) -> MultiFactorProviderAmazonSNS:
        return self._write("PUT", sns, "providers", "sns", opts=opts)

    def apns(self, *opts: RequestOption) -> MultiFactorProviderAPNS:
        return self._read(MultiFactorProviderAPNS, "providers", "apns", opts=opts)

    def update_apns(self, a: MultiFactorProviderAPNS, *opts: RequestOption) -> MultiFactorProviderAPNS:
        """部分更新 (PATCH)，p12 只写不读"""
        return self._write("PATCH", a, "providers", "apns", opts=opts)

    def fcm(self, *opts: RequestOption) -> MultiFactorProviderFCM:
        return self._read(MultiFactorProviderFCM, "providers", "fcm", opts=opts)

    def update_fcm(self, f: MultiFactorProviderFCM, *opts: RequestOption) -> MultiFactorProviderFCM:
        return self._write("PATCH", f, "providers", "fcm", opts=opts)


class MultiFactorEmail(FactorManager):
    factor = "email"


class MultiFactorDUO(FactorManager):
    factor = "duo"

    def settings(self, *opts: RequestOption) -> MultiFactorDUOSettings:
        return self._read(MultiFactorDUOSettings, "settings", opts=opts)

    def update_settings(self, s: MultiFactorDUOSettings, *opts: RequestOption) -> MultiFactorDUOSettings:
        return self._write("PUT", s, "settings", opts=opts)


class MultiFactorOTP(FactorManager):
    factor = "otp"


class _WebAuthnFactor(FactorManager):
    def settings(self, *opts: RequestOption) -> MultiFactorWebAuthnSettings:
        return self._read(MultiFactorWebAuthnSettings, "settings", opts=opts)

    def update_settings(
        self, s: MultiFactorWebAuthnSettings, *opts: RequestOption
    ) -> MultiFactorWebAuthnSettings:
        return self._write("PUT", s, "settings", opts=opts)


class MultiFactorWebAuthnRoaming(_WebAuthnFactor):
    """安全密钥"""
    factor = "webauthn-roaming"


class MultiFactorWebAuthnPlatform(_WebAuthnFactor):
    """设备生物识别"""
    factor = "webauthn-platform"


class MultiFactorRecoveryCode(FactorManager):
    factor = "recovery-code"


class MultiFactorManager:
    """
    MFA 因子与策略

    list / policy / update_policy 直接在此处；
    各因子通过属性访问: phone, sms, push, email, duo, otp,
    webauthn_roaming, webauthn_platform, recovery_code
    """

    def __init__(self, client: "ManagementClient"):
        self.client = client
        self.phone = MultiFactorPhone(client)
        self.sms = MultiFactorSMS(client)
        self.push = MultiFactorPush(client)
        self.email = MultiFactorEmail(client)
        self.duo = MultiFactorDUO(client)
        self.otp = MultiFactorOTP(client)
        self.webauthn_roaming = MultiFactorWebAuthnRoaming(client)
        self.webauthn_platform = MultiFactorWebAuthnPlatform(client)
        self.recovery_code = MultiFactorRecoveryCode(client)

    def list(self, *opts: RequestOption) -> list[MultiFactor]:
        """列出所有因子及开启状态"""
        return self.client.request(
            "GET", self.client.uri("guardian", "factors"), target=_parse_factors, options=opts
        ) or []

    def policy(self, *opts: RequestOption) -> MultiFactorPolicies:
        """
        当前 MFA 策略

        ["all-applications"] / ["confidence-score"] / [] (关闭)
        """
        return self.client.request(
            "GET", self.client.uri("guardian", "policies"), target=_parse_policies, options=opts
        ) or []

    def update_policy(self, policies: MultiFactorPolicies, *opts: RequestOption) -> MultiFactorPolicies:
        """
        替换 MFA 策略 (PUT)

        服务端整体替换，不与原有策略合并；传 [] 关闭 MFA 策略
        """
        return self.client.request(
            "PUT",
            self.client.uri("guardian", "policies"),
            body=list(policies),
            target=_parse_policies,
            options=opts,
        ) or []


# ============ 注册 ============

class EnrollmentManager:
    """MFA 注册记录与注册 ticket"""

    def __init__(self, client: "ManagementClient"):
        self.client = client

    def create_ticket(self, t: CreateEnrollmentTicket, *opts: RequestOption) -> EnrollmentTicket:
        """
        创建注册 ticket

        返回新的 EnrollmentTicket (ticket_id, ticket_url)，不修改传入的请求对象
        """
        return self.client.request(
            "POST",
            self.client.uri("guardian", "enrollments", "ticket"),
            body=t,
            target=EnrollmentTicket,
            options=opts,
        )

    def get(self, enrollment_id: str, *opts: RequestOption) -> Enrollment:
        """
        获取注册记录

        Raises:
            APIError: 不存在时 status_code == 404
        """
        return self.client.request(
            "GET",
            self.client.uri("guardian", "enrollments", enrollment_id),
            target=Enrollment,
            options=opts,
        )

    def delete(self, enrollment_id: str, *opts: RequestOption) -> None:
        self.client.request(
            "DELETE", self.client.uri("guardian", "enrollments", enrollment_id), options=opts
        )

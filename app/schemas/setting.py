from pydantic import BaseModel, Field


class AppSettings(BaseModel):
    name: str = "SSC Exam Hub"
    url: str = "https://sscexamhub.com"
    supportEmail: str = "support@sscexamhub.com"
    contactPhone: str = "+91 1234567890"


class PaymentSettings(BaseModel):
    razorpayKeyId: str = ""
    razorpayKeySecret: str = ""
    currency: str = "INR"
    freePlanPrice: float = 0
    proPlanPrice: float = 499


class EmailSettings(BaseModel):
    smtpHost: str = "smtp.gmail.com"
    smtpPort: int = 587
    smtpUser: str = ""
    smtpPassword: str = ""
    senderName: str = "SSC Exam Hub"
    senderEmail: str = ""


class StorageSettings(BaseModel):
    r2AccountId: str = ""
    r2AccessKeyId: str = ""
    r2SecretAccessKey: str = ""
    r2BucketName: str = "ssc-exam-content"
    r2PublicUrl: str = ""


class AISettings(BaseModel):
    geminiApiKey: str = ""
    model: str = "gemini-pro"
    freeCreditLimit: int = 3
    proCreditLimit: int = 50


class SettingsPayload(BaseModel):
    """관리자 설정 전체 (섹션별 한 행으로 저장)

    필드명은 관리자 화면이 저장해 온 JSON 키(camelCase)를 그대로 따른다.
    """
    app: AppSettings = Field(default_factory=AppSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ai: AISettings = Field(default_factory=AISettings)


class GrantAdminRequest(BaseModel):
    email: str = Field(..., min_length=3)

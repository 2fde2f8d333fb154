"""Fixed, localized (Persian) strings returned to API clients and sent to recipients."""

# Auth
UNAUTHORIZED = "دسترسی غیرمجاز"
ADMIN_ONLY = "دسترسی غیرمجاز - تنها ادمین"
INVALID_CREDENTIALS = "نام کاربری یا رمز عبور اشتباه است"

# Contracts
CONTRACT_NOT_FOUND = "قرارداد یافت نشد"
CONTRACT_TERMINATED = "این قرارداد فسخ شده است"
CONTRACT_SIGNED = "قرارداد با موفقیت امضا شد"
CONTRACT_TERMINATED_SUCCESS = "قرارداد با موفقیت فسخ شد"
CONTRACT_UPDATED = "قرارداد با موفقیت بروزرسانی شد"
CONTRACT_DELETED = "قرارداد با موفقیت حذف شد"
NO_UPDATABLE_FIELDS = "هیچ فیلد قابل بروزرسانی ارسال نشده"
REQUIRED_FIELD_CLEARED = "فیلدهای اجباری قرارداد نمی‌توانند خالی باشند"
INVALID_DATE_RANGE = "تاریخ پایان نمی‌تواند قبل از تاریخ شروع باشد"

# Settings
SETTINGS_SAVED = "تنظیمات با موفقیت ذخیره شد"

# Notification test action
TEST_SENT = "اعلان تست با موفقیت ارسال شد"
UNKNOWN_CHANNEL = "نوع اعلان نامعتبر است"
RECIPIENT_REQUIRED = "آدرس ایمیل الزامی است"
INVALID_RECIPIENT = "گیرنده اعلان نامعتبر است"
CHANNEL_NOT_CONFIGURED = "این سرویس اعلان پیکربندی نشده است"
NOTIFICATION_FAILED = "خطا در ارسال اعلان تست"

# Server-side failures
DATABASE_ERROR = "خطا در ارتباط با پایگاه داده"
CONFIGURATION_ERROR = "خطای پیکربندی سرور"
INTERNAL_ERROR = "خطای داخلی سرور"

# Outbound message bodies
ACCESS_CODE_SUBJECT = "کد دسترسی قرارداد اجاره"
ACCESS_CODE_BODY = "کد دسترسی شما: {access_code}\nشماره قرارداد: {contract_number}"
SIGNED_EMAIL_SUBJECT = "قرارداد اجاره امضا شد"
SIGNED_EMAIL_BODY = "قرارداد شماره {contract_number} توسط {tenant_name} امضا شد."
SIGNED_TELEGRAM = (
    "<b>قرارداد اجاره امضا شد</b>\n\n"
    "• شماره قرارداد: <code>{contract_number}</code>\n"
    "• نام موجر: {landlord_name}\n"
    "• نام مستأجر: {tenant_name}"
)
SIGNED_WHATSAPP = (
    "*قرارداد اجاره امضا شد*\n\n"
    "• شماره قرارداد: {contract_number}\n"
    "• نام موجر: {landlord_name}\n"
    "• نام مستأجر: {tenant_name}"
)
TEST_SUBJECT = "تست اعلان ایمیل"
TEST_BODY = "این یک پیام تست است - سیستم مدیریت اجاره"

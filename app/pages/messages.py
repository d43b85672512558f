"""UI message catalogues (English and Thai).

Templates read these through the `t` mapping; auth failures and validation
errors are translated here so views never hard-code user-facing text.
"""

from app.domain.enums import AuthErrorReason
from app.domain.exceptions import ValidationException

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "app_title": "Case Document Filing",
        "nav_home": "Home",
        "nav_documents": "Documents",
        "nav_upload": "Upload",
        "nav_logout": "Sign out",
        "loading": "Checking your session...",
        "login_title": "Sign in",
        "login_subtitle": "Sign in to manage your documents",
        "login_submit": "Sign in",
        "login_no_account": "No account yet?",
        "login_register_link": "Register here",
        "register_title": "Register",
        "register_subtitle": "Create an account to start using the system",
        "register_submit": "Register",
        "register_have_account": "Already have an account?",
        "register_login_link": "Sign in",
        "register_password_hint": "At least 6 characters",
        "email": "Email",
        "password": "Password",
        "confirm_password": "Confirm password",
        "auth_invalid_credential": "Incorrect email or password",
        "auth_email_in_use": "This email is already in use",
        "auth_invalid_email": "The email address is not valid",
        "auth_too_many_attempts": "Too many attempts. Please wait a moment and try again",
        "auth_weak_password": "The password is not strong enough",
        "auth_unknown": "Something went wrong. Please try again",
        "validation_required": "Please fill in all required fields",
        "validation_password_mismatch": "Passwords do not match",
        "validation_password_short": "Password must be at least 6 characters",
        "validation_received_date": "Please enter a valid received date",
        "validation_file": "The selected file has no usable name",
        "upload_title": "Upload a new document",
        "upload_subtitle": "Fill in the details and attach the document file",
        "upload_submit": "Save document",
        "upload_success": "Saved!",
        "upload_redirecting": "Taking you to the documents page...",
        "upload_file_hint": "PDF, Word, Excel and images are supported",
        "complainant_name": "Complainant",
        "complainant_placeholder": "Complainant name",
        "subject": "Subject",
        "subject_placeholder": "Document subject",
        "source": "Source",
        "source_placeholder": "Department / agency",
        "received_date": "Received",
        "notes": "Notes",
        "notes_placeholder": "Additional details (optional)",
        "file": "File",
        "documents_title": "All documents",
        "documents_subtitle": "Manage and search saved documents",
        "documents_search_placeholder": "Search documents...",
        "documents_all_sources": "All sources",
        "documents_filter": "Filter",
        "documents_showing": "Showing {shown} of {total} documents",
        "documents_empty": "No documents found",
        "documents_from": "From",
        "documents_date": "Date",
        "documents_notes": "Notes",
        "documents_open_file": "Open file",
        "edit": "Edit",
        "delete": "Delete",
        "save": "Save",
        "cancel": "Cancel",
        "edit_title": "Edit document",
        "delete_title": "Delete document",
        "delete_confirm": "Are you sure you want to delete this document?",
        "notice_deleted": "Document deleted",
        "notice_deleted_orphan": "Document deleted, but its file could not be removed and was reported for cleanup",
        "notice_updated": "Document updated",
        "notice_not_found": "That document no longer exists",
        "operation_failed": "The operation failed. Please try again",
        "load_failed": "Could not load documents. Please try again",
        "dashboard_title": "Dashboard",
        "dashboard_subtitle": "Overview and filing statistics",
        "stat_total": "All documents",
        "stat_this_month": "This month",
        "stat_with_files": "With attachments",
        "stat_sources": "Sources",
        "dashboard_top_sources": "Top 5 sources",
        "dashboard_recent": "Latest documents",
        "dashboard_summary": "You have {total} documents from {sources} sources",
        "dashboard_empty": "No documents yet",
        "error_title": "Something went wrong",
        "not_found_title": "Page not found",
        "back_home": "Back to home",
    },
    "th": {
        "app_title": "ระบบจัดเก็บเอกสารคดีวินัย",
        "nav_home": "หน้าแรก",
        "nav_documents": "เอกสาร",
        "nav_upload": "อัปโหลด",
        "nav_logout": "ออกจากระบบ",
        "loading": "กำลังตรวจสอบสิทธิ์...",
        "login_title": "เข้าสู่ระบบ",
        "login_subtitle": "เข้าสู่ระบบเพื่อจัดการเอกสารของคุณ",
        "login_submit": "เข้าสู่ระบบ",
        "login_no_account": "ยังไม่มีบัญชี?",
        "login_register_link": "สมัครสมาชิกที่นี่",
        "register_title": "สมัครสมาชิก",
        "register_subtitle": "สร้างบัญชีเพื่อเริ่มใช้งานระบบ",
        "register_submit": "สมัครสมาชิก",
        "register_have_account": "มีบัญชีอยู่แล้ว?",
        "register_login_link": "เข้าสู่ระบบ",
        "register_password_hint": "ต้องมีอย่างน้อย 6 ตัวอักษร",
        "email": "อีเมล",
        "password": "รหัสผ่าน",
        "confirm_password": "ยืนยันรหัสผ่าน",
        "auth_invalid_credential": "อีเมลหรือรหัสผ่านไม่ถูกต้อง",
        "auth_email_in_use": "อีเมลนี้ถูกใช้งานแล้ว",
        "auth_invalid_email": "รูปแบบอีเมลไม่ถูกต้อง",
        "auth_too_many_attempts": "ลองเข้าสู่ระบบหลายครั้งเกินไป กรุณารอสักครู่",
        "auth_weak_password": "รหัสผ่านไม่ปลอดภัยพอ",
        "auth_unknown": "เกิดข้อผิดพลาด กรุณาลองใหม่อีกครั้ง",
        "validation_required": "กรุณากรอกข้อมูลที่จำเป็นให้ครบ",
        "validation_password_mismatch": "รหัสผ่านไม่ตรงกัน",
        "validation_password_short": "รหัสผ่านต้องมีอย่างน้อย 6 ตัวอักษร",
        "validation_received_date": "กรุณาระบุวันที่รับเอกสารให้ถูกต้อง",
        "validation_file": "ชื่อไฟล์ที่เลือกไม่ถูกต้อง",
        "upload_title": "อัปโหลดเอกสารใหม่",
        "upload_subtitle": "กรอกข้อมูลและอัปโหลดไฟล์เอกสารของคุณ",
        "upload_submit": "บันทึกเอกสาร",
        "upload_success": "บันทึกสำเร็จ!",
        "upload_redirecting": "กำลังนำคุณไปยังหน้าเอกสาร...",
        "upload_file_hint": "รองรับ PDF, Word, Excel, รูปภาพ",
        "complainant_name": "ชื่อผู้ร้อง",
        "complainant_placeholder": "กรอกชื่อผู้ร้อง",
        "subject": "เรื่อง",
        "subject_placeholder": "หัวข้อเอกสาร",
        "source": "มาจาก",
        "source_placeholder": "แผนก/หน่วยงาน",
        "received_date": "วันที่รับ",
        "notes": "หมายเหตุ",
        "notes_placeholder": "รายละเอียดเพิ่มเติม (ถ้ามี)",
        "file": "ไฟล์",
        "documents_title": "เอกสารทั้งหมด",
        "documents_subtitle": "จัดการและค้นหาเอกสารที่บันทึกไว้",
        "documents_search_placeholder": "ค้นหาเอกสาร...",
        "documents_all_sources": "แหล่งที่มาทั้งหมด",
        "documents_filter": "กรอง",
        "documents_showing": "แสดง {shown} จาก {total} เอกสาร",
        "documents_empty": "ไม่พบเอกสาร",
        "documents_from": "มาจาก",
        "documents_date": "วันที่",
        "documents_notes": "หมายเหตุ",
        "documents_open_file": "เปิดไฟล์",
        "edit": "แก้ไข",
        "delete": "ลบ",
        "save": "บันทึก",
        "cancel": "ยกเลิก",
        "edit_title": "แก้ไขเอกสาร",
        "delete_title": "ลบเอกสาร",
        "delete_confirm": "คุณแน่ใจหรือไม่ที่จะลบเอกสารนี้?",
        "notice_deleted": "ลบเอกสารสำเร็จ!",
        "notice_deleted_orphan": "ลบเอกสารแล้ว แต่ลบไฟล์ไม่สำเร็จ ได้บันทึกไว้เพื่อตรวจสอบ",
        "notice_updated": "แก้ไขเอกสารสำเร็จ",
        "notice_not_found": "ไม่พบเอกสารนี้แล้ว",
        "operation_failed": "เกิดข้อผิดพลาด กรุณาลองใหม่อีกครั้ง",
        "load_failed": "เกิดข้อผิดพลาดในการโหลดข้อมูล",
        "dashboard_title": "Dashboard",
        "dashboard_subtitle": "ภาพรวมและสถิติการจัดเก็บเอกสาร",
        "stat_total": "เอกสารทั้งหมด",
        "stat_this_month": "เดือนนี้",
        "stat_with_files": "มีไฟล์แนบ",
        "stat_sources": "แหล่งที่มา",
        "dashboard_top_sources": "Top 5 แหล่งที่มา",
        "dashboard_recent": "เอกสารล่าสุด",
        "dashboard_summary": "คุณมีเอกสารทั้งหมด {total} รายการ จาก {sources} แหล่งที่มา",
        "dashboard_empty": "ยังไม่มีเอกสาร",
        "error_title": "เกิดข้อผิดพลาด",
        "not_found_title": "ไม่พบหน้าที่ต้องการ",
        "back_home": "กลับหน้าแรก",
    },
}

# (field, rule) -> message key; fields not listed fall back to "validation_required".
_VALIDATION_MESSAGES: dict[tuple[str, str], str] = {
    ("confirm_password", "mismatch"): "validation_password_mismatch",
    ("password", "min_length"): "validation_password_short",
    ("received_date", "required"): "validation_received_date",
    ("received_date", "invalid"): "validation_received_date",
    ("file", "invalid"): "validation_file",
}


def get_messages(locale: str | None) -> dict[str, str]:
    """Return the catalogue for locale, falling back to English."""
    return MESSAGES.get(locale or DEFAULT_LOCALE, MESSAGES[DEFAULT_LOCALE])


def auth_error_message(reason: AuthErrorReason, locale: str | None) -> str:
    return get_messages(locale)[f"auth_{reason.value}"]


def validation_message(exc: ValidationException, locale: str | None) -> str:
    """Localized inline text for a ValidationException."""
    key = _VALIDATION_MESSAGES.get((exc.field or "", exc.rule), "validation_required")
    return get_messages(locale)[key]

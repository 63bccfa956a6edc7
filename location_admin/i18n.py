"""
Translation lookup for admin strings.

Keys follow the host panel's namespaced form (``namespace::group.key``).
Unknown keys resolve to themselves so a missing entry never breaks a page.
"""
import os
from typing import Dict

DEFAULT_LOCALE = "en"

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "plugins/location::city.name": "Cities",
        "plugins/location::city.create": "Create new city",
        "plugins/location::city.edit": "Edit city",
        "plugins/location::city.state": "State",
        "plugins/location::city.select_state": "Select state...",
        "plugins/location::city.select_city": "Select city...",
        "plugins/location::city.order": "Order",
        "core/base::forms.name": "Name",
        "core/base::forms.save": "Save",
        "core/base::tables.status": "Status",
        "core/base::tables.created_at": "Created at",
        "core/base::tables.operations": "Operations",
        "core/base::tables.edit": "Edit",
        "core/base::tables.delete": "Delete",
        "core/base::tables.delete_selected": "Delete selected",
        "core/base::tables.no_record": "No records found",
        "core/base::enums.statuses.published": "Published",
        "core/base::enums.statuses.draft": "Draft",
        "core/base::enums.statuses.pending": "Pending",
        "core/base::notices.create_success_message": "Created successfully",
        "core/base::notices.update_success_message": "Updated successfully",
        "core/base::notices.delete_success_message": "Deleted successfully",
        "core/base::notices.no_select": "Please select at least one record to perform this action!",
        "core/base::notices.edit_not_allowed": "You are not allowed to edit this item",
    },
    "vi": {
        "plugins/location::city.name": "Thành phố",
        "plugins/location::city.create": "Thêm thành phố",
        "plugins/location::city.edit": "Sửa thành phố",
        "plugins/location::city.select_city": "Chọn thành phố...",
        "core/base::notices.create_success_message": "Tạo thành công",
        "core/base::notices.update_success_message": "Cập nhật thành công",
        "core/base::notices.delete_success_message": "Xóa thành công",
        "core/base::notices.no_select": "Vui lòng chọn ít nhất một bản ghi để thực hiện hành động này!",
    },
}


class Translator:
    """Resolve translation keys for one locale, falling back to English."""

    def __init__(self, locale: str | None = None):
        locale = (locale or os.getenv("APP_LOCALE") or DEFAULT_LOCALE).lower()
        self.locale = locale if locale in CATALOGS else DEFAULT_LOCALE

    def trans(self, key: str, **replacements) -> str:
        text = CATALOGS[self.locale].get(key) or CATALOGS[DEFAULT_LOCALE].get(key) or key
        for name, value in replacements.items():
            text = text.replace(f":{name}", str(value))
        return text

    __call__ = trans

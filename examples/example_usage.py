"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the import and payroll rules live in services.
"""

import importlib

from config import get_settings_module

from dtr_payroll.container import build_container
from dtr_payroll.core.context import OperatorContext

CSV = """employee_id,entry_date,time_in,time_out,month,hours_worked,overtime_hrs,absent
1001,8/1/2024,8:00,17:00,AUGUST,8,0,No
1001,8/2/2024,8:00,19:00,AUGUST,8,2,No
"""


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    context = OperatorContext(actor_id=1, actor_name="hr-admin")

    summary = container.dtr_import_service.import_csv(CSV, context=context)
    print(summary.to_dict())

    result = container.payslip_service.generate_payslips([1001], month="August", year=2024, context=context)
    print(result.summary)


if __name__ == "__main__":
    main()

import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("employee_code", models.CharField(max_length=50)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("position", models.CharField(max_length=255)),
                ("department", models.CharField(blank=True, default="", max_length=255)),
                ("hire_date", models.DateTimeField()),
                ("salary", models.DecimalField(decimal_places=2, max_digits=18)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="employees", to="accounts.company")),
            ],
            options={
                "ordering": ["name"],
                "constraints": [models.UniqueConstraint(fields=("company", "employee_code"), name="uniq_employee_code_per_company")],
            },
        ),
        migrations.CreateModel(
            name="PayrollRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("period", models.CharField(max_length=20)),
                ("gross_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("deductions", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("net_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("status", models.CharField(choices=[("DRAFT", "Draft"), ("APPROVED", "Approved"), ("PAID", "Paid")], default="DRAFT", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="payroll_records", to="payroll.employee")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="PayrollItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_type", models.CharField(choices=[("SALARY", "Salary"), ("BONUS", "Bonus"), ("OVERTIME", "Overtime"), ("DEDUCTION", "Deduction"), ("TAX", "Tax"), ("INSURANCE", "Insurance")], db_column="type", max_length=20)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("payroll_record", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="payroll.payrollrecord")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]

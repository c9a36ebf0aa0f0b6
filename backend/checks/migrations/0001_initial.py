import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Check",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("check_type", models.CharField(choices=[("RECEIVABLE", "Receivable"), ("PAYABLE", "Payable")], db_column="type", max_length=20)),
                ("check_number", models.CharField(max_length=100)),
                ("bank_name", models.CharField(max_length=255)),
                ("account_number", models.CharField(blank=True, default="", max_length=100)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("issue_date", models.DateTimeField()),
                ("due_date", models.DateTimeField()),
                ("status", models.CharField(choices=[("PENDING", "Pending"), ("CLEARED", "Cleared"), ("BOUNCED", "Bounced"), ("CANCELLED", "Cancelled")], default="PENDING", max_length=20)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="checks", to="accounts.company")),
            ],
            options={
                "ordering": ["due_date", "id"],
                "indexes": [models.Index(fields=["company", "status", "due_date"], name="checks_company_status_due_idx")],
                "constraints": [models.CheckConstraint(condition=models.Q(("amount__gte", 0)), name="check_amount_non_negative")],
            },
        ),
    ]

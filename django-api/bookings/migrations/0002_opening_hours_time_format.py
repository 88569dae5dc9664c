import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="openinghours",
            name="opening_time",
            field=models.CharField(
                max_length=5,
                validators=[
                    django.core.validators.RegexValidator(
                        "^([01]\\d|2[0-3]):[0-5]\\d$", "Use 24-hour HH:MM."
                    )
                ],
            ),
        ),
        migrations.AlterField(
            model_name="openinghours",
            name="closing_time",
            field=models.CharField(
                max_length=5,
                validators=[
                    django.core.validators.RegexValidator(
                        "^([01]\\d|2[0-3]):[0-5]\\d$", "Use 24-hour HH:MM."
                    )
                ],
            ),
        ),
    ]

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("camps", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="finalizedselection",
            name="camp",
            field=models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="finalized_selections",
                to="camps.campnotification",
            ),
        ),
        migrations.AlterField(
            model_name="finalizedselection",
            name="submission",
            field=models.OneToOneField(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="finalized_selection",
                to="camps.cadetsubmission",
            ),
        ),
    ]

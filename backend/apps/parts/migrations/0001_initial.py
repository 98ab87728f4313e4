from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='MeasurementUnit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('unit', models.CharField(blank=True, help_text="Symbol shown next to values, e.g. 'm' or 'g'", max_length=20, null=True)),
                ('is_integer', models.BooleanField(default=False, help_text='Amounts in this unit are whole numbers')),
                ('use_si_prefix', models.BooleanField(default=False, help_text='Values may be entered with a prefix like k or m', verbose_name='Use SI prefix')),
                ('comment', models.TextField(blank=True, default='')),
            ],
            options={
                'verbose_name': 'Measurement Unit',
                'verbose_name_plural': 'Measurement Units',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Part',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('needs_review', models.BooleanField(default=False)),
                ('tags', models.TextField(blank=True, default='', help_text='Comma separated list of tags')),
                ('mass', models.FloatField(blank=True, help_text='Mass of a single part unit in grams, empty if unknown', null=True, validators=[django.core.validators.MinValueValidator(0.0)])),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('min_amount', models.FloatField(default=0.0, help_text='Stock level below which the part should be reordered', validators=[django.core.validators.MinValueValidator(0.0)])),
                ('part_unit', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='parts', to='parts.measurementunit', verbose_name='Measurement unit')),
            ],
            options={
                'verbose_name': 'Part',
                'verbose_name_plural': 'Parts',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['name'], name='parts_part_name_idx'),
                    models.Index(fields=['needs_review'], name='parts_part_review_idx'),
                ],
            },
        ),
    ]

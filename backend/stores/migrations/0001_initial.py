from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('merchants', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Store',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Store name (e.g., 'Downtown', 'Airport')", max_length=100)),
                ('slug', models.SlugField(help_text='URL-friendly identifier for this store', max_length=100)),
                ('timezone', models.CharField(choices=[('UTC', 'UTC (Coordinated Universal Time)'), ('Europe/London', 'Greenwich Mean Time (UK)'), ('Europe/Amsterdam', 'Central European Time (Netherlands)'), ('Europe/Berlin', 'Central European Time (Germany)'), ('Europe/Paris', 'Central European Time'), ('Europe/Helsinki', 'Eastern European Time'), ('America/New_York', 'Eastern Time (US & Canada)'), ('America/Chicago', 'Central Time (US & Canada)'), ('America/Los_Angeles', 'Pacific Time (US & Canada)'), ('Australia/Sydney', 'Australian Eastern Time'), ('Asia/Tokyo', 'Japan Standard Time')], default='UTC', help_text="This store's timezone. Used for reports and pickup days.", max_length=50)),
                ('currency', models.CharField(blank=True, help_text="ISO 4217 currency code. Falls back to ORDERING['DEFAULT_CURRENCY'] when empty.", max_length=3)),
                ('is_active', models.BooleanField(default=True, help_text='Inactive stores do not accept new orders')),
                ('dine_in_enabled', models.BooleanField(default=True)),
                ('takeaway_enabled', models.BooleanField(default=True)),
                ('delivery_enabled', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('merchant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stores', to='merchants.merchant')),
            ],
            options={
                'ordering': ['name'],
                'indexes': [models.Index(fields=['merchant', 'is_active'], name='store_merchant_active_idx')],
                'constraints': [models.UniqueConstraint(fields=('merchant', 'slug'), name='unique_store_slug_per_merchant')],
            },
        ),
        migrations.CreateModel(
            name='StoreCounter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('last_pickup_number', models.PositiveIntegerField(default=0)),
                ('store', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='counter', to='stores.store')),
            ],
        ),
    ]

from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('merchants', '0001_initial'),
        ('stores', '0001_initial'),
        ('menu', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('CREATED', 'Created'), ('CONFIRMED', 'Confirmed'), ('PREPARING', 'Preparing'), ('READY', 'Ready'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='CREATED', max_length=10)),
                ('payment_status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('REFUNDED', 'Refunded')], default='PENDING', max_length=10)),
                ('order_type', models.CharField(choices=[('dine_in', 'Dine In'), ('takeaway', 'Takeaway'), ('delivery', 'Delivery')], default='takeaway', max_length=10)),
                ('pickup_number', models.PositiveIntegerField()),
                ('version', models.PositiveIntegerField(default=1)),
                ('idempotency_key', models.CharField(blank=True, help_text='Client-supplied key; resubmitting the same key returns the original order.', max_length=100, null=True)),
                ('customer_name', models.CharField(blank=True, max_length=150)),
                ('customer_email', models.EmailField(blank=True, max_length=254)),
                ('customer_phone', models.CharField(blank=True, max_length=20)),
                ('customer_notes', models.TextField(blank=True)),
                ('currency', models.CharField(max_length=3)),
                ('subtotal_cents', models.IntegerField(default=0)),
                ('vat_cents', models.IntegerField(default=0)),
                ('total_cents', models.IntegerField(default=0)),
                ('payment_reference', models.CharField(blank=True, max_length=100)),
                ('refund_reference', models.CharField(blank=True, max_length=100)),
                ('cancel_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('preparing_at', models.DateTimeField(blank=True, null=True)),
                ('ready_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('merchant', models.ForeignKey(help_text='Owner of the store at the time the order was placed', on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='merchants.merchant')),
                ('store', models.ForeignKey(help_text='Store where this order was placed', on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='stores.store')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['store', 'status'], name='order_store_status_idx'),
                    models.Index(fields=['store', 'created_at'], name='order_store_created_idx'),
                    models.Index(fields=['merchant', 'created_at'], name='order_merchant_created_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('store', 'idempotency_key'), name='unique_order_idempotency_key_per_store')],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('item_name', models.CharField(max_length=200)),
                ('quantity', models.PositiveIntegerField()),
                ('unit_price_cents', models.IntegerField()),
                ('options_price_cents', models.IntegerField(default=0)),
                ('line_total_cents', models.IntegerField()),
                ('vat_rate_basis_points', models.PositiveIntegerField()),
                ('vat_cents', models.IntegerField()),
                ('position', models.PositiveIntegerField(default=0)),
                ('item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='order_items', to='menu.item')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
            ],
            options={
                'ordering': ['position', 'id'],
            },
        ),
        migrations.CreateModel(
            name='OrderItemOption',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('option_group_id', models.PositiveIntegerField()),
                ('option_group_name', models.CharField(max_length=100)),
                ('choice_name', models.CharField(max_length=100)),
                ('price_delta_cents', models.IntegerField(default=0)),
                ('choice', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='menu.optionchoice')),
                ('order_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='options', to='orders.orderitem')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
    ]

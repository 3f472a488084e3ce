from django.db import migrations, models

import orders.utils


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_id', models.CharField(db_index=True, default=orders.utils.generate_order_id, max_length=40, unique=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('currency', models.CharField(default=orders.utils.default_currency, max_length=8)),
                ('payment_method', models.CharField(choices=[('CashOnDelivery', 'Cash On Delivery'), ('OnlineGateway', 'Online Payment')], default='CashOnDelivery', max_length=20)),
                ('payment_status', models.CharField(choices=[('Pending', 'Pending'), ('Success', 'Success'), ('Failure', 'Failure'), ('Cancelled', 'Cancelled')], db_index=True, default='Pending', max_length=12)),
                ('payment_details', models.JSONField(blank=True, null=True)),
                ('customer_name', models.CharField(blank=True, default='', max_length=128)),
                ('customer_email', models.EmailField(blank=True, default='', max_length=254)),
                ('customer_phone', models.CharField(blank=True, default='', max_length=20)),
                ('billing_address', models.CharField(blank=True, default='', max_length=255)),
                ('billing_country', models.CharField(blank=True, default='AE', max_length=2)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ('-created_at',),
            },
        ),
    ]

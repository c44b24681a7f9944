from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BlockedEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ip', models.CharField(db_index=True, max_length=255)),
                ('requests', models.PositiveIntegerField()),
                ('blocked_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('comment', models.TextField()),
            ],
            options={
                'verbose_name': 'Blocked IP',
                'verbose_name_plural': 'Blocked IPs',
                'db_table': 'blocked_user',
                'ordering': ['-blocked_date', 'ip'],
            },
        ),
        migrations.CreateModel(
            name='LogRecord',
            fields=[
                ('id', models.PositiveIntegerField(primary_key=True, serialize=False)),
                ('timestamp', models.DateTimeField(db_index=True)),
                ('ip', models.CharField(db_index=True, max_length=255)),
                ('request', models.TextField()),
                ('status', models.TextField()),
                ('user_agent', models.TextField()),
            ],
            options={
                'db_table': 'user_log',
                'ordering': ['id'],
            },
        ),
    ]

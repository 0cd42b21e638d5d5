from django.core.management.base import BaseCommand, CommandError
from users.models import User, Role
from rich.console import Console


class Command(BaseCommand):
    help = 'Assign a role to a user'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.console = Console()

    def add_arguments(self, parser):
        parser.add_argument('username', type=str, help='Username of the account')
        parser.add_argument('role', type=str, help=f"One of: {', '.join(Role.values)}")
        parser.add_argument(
            '--staff',
            action='store_true',
            help='Also grant Django admin access',
        )

    def handle(self, *args, **options):
        username = options['username']
        role = options['role'].upper()

        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            raise CommandError(f'User "{username}" does not exist')

        previous = user.role
        try:
            user.assign_role(role)
        except ValueError as e:
            raise CommandError(str(e))

        if options['staff'] and not user.is_staff:
            user.is_staff = True
            user.save(update_fields=['is_staff', 'updated_at'])

        if previous == role:
            self.console.print(f"[yellow]• User '{username}' already has role '{role}'[/yellow]")
        else:
            self.console.print(f"[green]✓ Changed role of '{username}' from '{previous}' to '{role}'[/green]")

        if role == Role.STUDENT and not hasattr(user, 'student_profile'):
            self.console.print(
                f"[cyan]User '{username}' has no student profile yet; create one before enrolling.[/cyan]"
            )

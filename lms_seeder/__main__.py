from lms_seeder.main import cli

cli()

from oracle_skills.cli import app

app(prog_name="oracle-skills")

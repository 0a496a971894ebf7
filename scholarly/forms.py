from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, TextAreaField, SelectField, SubmitField
from wtforms.validators import DataRequired, Length, Optional, URL

RESOURCE_TYPE_CHOICES = [
    ('ANNOUNCEMENT', 'Announcement'),
    ('VIDEO', 'Lesson / Meeting'),
    ('TIMETABLE', 'Schedule'),
    ('DOCUMENT', 'General Material'),
]


class HubForm(FlaskForm):
    logo_url = StringField('Logo URL (Optional)', validators=[Optional(), URL(message='Enter a valid URL'), Length(max=500)])
    name = StringField('Hub Name', validators=[DataRequired(message='Enter a hub name'), Length(max=200)])
    description = TextAreaField('Vision', validators=[Optional(), Length(max=1000)])
    student_passphrase = StringField('Student Code', validators=[DataRequired(message='Enter a student code'), Length(max=100)])
    admin_passphrase = StringField('Staff Code', validators=[DataRequired(message='Enter a staff code'), Length(max=100)])
    submit = SubmitField('Create Hub')


class JoinHubForm(FlaskForm):
    passphrase = PasswordField('Access Code', validators=[DataRequired(message='Enter an access code')])
    submit = SubmitField('Enter Hub')


class DeleteHubForm(FlaskForm):
    admin_passphrase = PasswordField('Staff Code', validators=[DataRequired(message='Enter the staff code')])
    submit = SubmitField('Delete Hub')


class RoomForm(FlaskForm):
    name = StringField('Room Title', validators=[DataRequired(message='Enter a room title'), Length(max=200)])
    teacher = StringField('Lead Instructor Name', validators=[DataRequired(message='Enter the instructor name'), Length(max=120)])
    submit = SubmitField('Create Room')


class ResourceForm(FlaskForm):
    type = SelectField('Category', choices=RESOURCE_TYPE_CHOICES, default='ANNOUNCEMENT')
    title = StringField('Resource Title', validators=[DataRequired(message='Enter a title'), Length(max=200)])
    description = TextAreaField('Summary or instructions', validators=[DataRequired(message='Enter a description')])
    url = StringField('Resource or Zoom URL', validators=[Optional(), URL(message='Enter a valid URL'), Length(max=1000)])
    submit = SubmitField('Publish')


class DeleteResourceForm(FlaskForm):
    submit = SubmitField('Delete')

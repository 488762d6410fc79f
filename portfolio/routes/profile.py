from flask_restx import Namespace, Resource

from portfolio.api_responses import success_response
from portfolio.routes import register_crud
from portfolio.services import get_services

ns_education = Namespace("education", description="Education history with achievements")
ns_experiences = Namespace("experiences", description="Work experience with responsibilities and skills")
ns_testimonials = Namespace("testimonials", description="Testimonials")


@ns_testimonials.route("/featured")
class FeaturedTestimonials(Resource):
    @ns_testimonials.doc("list_featured_testimonials")
    def get(self):
        return success_response(get_services().testimonials.featured())


@ns_testimonials.route("/status/<string:status>")
@ns_testimonials.param("status", "pending, approved or rejected")
class TestimonialsByStatus(Resource):
    @ns_testimonials.doc("list_testimonials_by_status")
    def get(self, status):
        return success_response(get_services().testimonials.by_status(status))


register_crud(ns_education, "education", "Education")
register_crud(ns_experiences, "experiences", "Experience")
register_crud(ns_testimonials, "testimonials", "Testimonial")

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated

from guest.serializers import UserSerializer


@extend_schema(
    summary="Guest registration",
    description=(
            "Creates a new guest account identified by email.\n\n"
            "This endpoint is public. Admin rights cannot be requested here."
    ),
    request=UserSerializer,
    responses={
        201: UserSerializer,
        400: OpenApiResponse(description="Validation error"),
    },
)
class CreateUserView(generics.CreateAPIView):
    serializer_class = UserSerializer
    authentication_classes = ()
    permission_classes = (AllowAny,)


@extend_schema(
    summary="Retrieve or update the current guest",
    description=(
            "Returns or updates the profile of the authenticated guest. "
            "The id shown here is the owner id stored on their bookings.\n\n"
            "Authentication: JWT required."
    ),
    responses={
        200: UserSerializer,
        401: OpenApiResponse(
            description="Authentication credentials were not provided"),
    },
)
class ManageUserView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = (IsAuthenticated,)

    def get_object(self):
        return self.request.user
